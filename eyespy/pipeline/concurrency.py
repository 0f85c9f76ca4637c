"""Bounded fan-out over a list with a fail-fast join."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Sequence, TypeVar

from ..retrieval.config import CONCURRENCY_LIMIT

T = TypeVar("T")
R = TypeVar("R")


def bounded_map(fn: Callable[[T], R], items: Sequence[T], limit: int = CONCURRENCY_LIMIT) -> List[R]:
    """Apply `fn` to every item with at most `limit` calls in flight.

    Results line up with `items` by index, whatever order calls finish in.
    The first exception raised by any call is re-raised; calls that have not
    started yet are cancelled, running ones finish, and no results are kept.
    """
    if not items:
        return []
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    executor = ThreadPoolExecutor(max_workers=min(limit, len(items)))
    try:
        futures: Dict[Future, int] = {executor.submit(fn, item): idx for idx, item in enumerate(items)}
        done, _pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [f for f in done if not f.cancelled() and f.exception() is not None]
        if failed:
            first = min(failed, key=lambda f: futures[f])
            executor.shutdown(wait=True, cancel_futures=True)
            raise first.exception()
        results: List[R] = [None] * len(items)  # type: ignore[list-item]
        for future, idx in futures.items():
            results[idx] = future.result()
        return results
    finally:
        executor.shutdown(wait=True)


__all__ = ["bounded_map"]
