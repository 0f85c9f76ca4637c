"""Tests for eyespy.pipeline.concurrency bounded fan-out.

Run with:
    pytest tests/test_concurrency.py --maxfail=1 -v --cov=eyespy.pipeline.concurrency --cov-report=term-missing
"""

import threading
import time

import pytest

from eyespy.pipeline.concurrency import bounded_map


class InFlightCounter:
    def __init__(self):
        self.lock = threading.Lock()
        self.current = 0
        self.peak = 0

    def __call__(self, item):
        with self.lock:
            self.current += 1
            self.peak = max(self.peak, self.current)
        try:
            time.sleep(0.01)
            return item * 2
        finally:
            with self.lock:
                self.current -= 1


def test_empty_input_returns_empty_list():
    assert bounded_map(lambda x: x, []) == []


def test_results_follow_input_order_not_completion_order():
    def slow_first(item):
        time.sleep(0.05 if item == 0 else 0)
        return f"r{item}"

    assert bounded_map(slow_first, [0, 1, 2, 3], limit=4) == ["r0", "r1", "r2", "r3"]


def test_in_flight_calls_never_exceed_limit():
    counter = InFlightCounter()
    results = bounded_map(counter, list(range(60)), limit=20)
    assert results == [i * 2 for i in range(60)]
    assert 1 <= counter.peak <= 20


def test_small_limit_is_respected():
    counter = InFlightCounter()
    bounded_map(counter, list(range(10)), limit=3)
    assert counter.peak <= 3


def test_first_error_is_raised_once_and_no_results_returned():
    attempts = []

    def compare(item):
        attempts.append(item)
        if item == 2:
            raise RuntimeError("compare failed")
        return item

    results = None
    with pytest.raises(RuntimeError, match="compare failed") as excinfo:
        results = bounded_map(compare, [0, 1, 2, 3, 4], limit=5)
    assert results is None
    assert excinfo.value.args == ("compare failed",)


def test_queued_calls_are_cancelled_after_a_failure():
    started = []

    def work(item):
        started.append(item)
        if item == "bad":
            raise ValueError(item)
        time.sleep(0.2)
        return item

    with pytest.raises(ValueError):
        bounded_map(work, ["bad", "slow", "never"], limit=1)
    assert "never" not in started


def test_invalid_limit_rejected():
    with pytest.raises(ValueError):
        bounded_map(lambda x: x, [1], limit=0)
