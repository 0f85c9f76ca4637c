"""Tests for eyespy.secrets token and config loading."""

import pytest

from eyespy.errors import ConfigError
from eyespy.secrets import load_json_file, read_token


def test_read_token_strips_whitespace(tmp_path):
    path = tmp_path / "token"
    path.write_text("  secret\n")
    assert read_token(path) == "secret"


def test_read_token_missing_or_empty(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        read_token(tmp_path / "absent")
    empty = tmp_path / "empty"
    empty.write_text("\n")
    with pytest.raises(ConfigError, match="empty"):
        read_token(empty)


def test_load_json_file_requires_object(tmp_path):
    good = tmp_path / "good.json"
    good.write_text('{"orgs": ["Acme"]}')
    assert load_json_file(good) == {"orgs": ["Acme"]}

    bad = tmp_path / "bad.json"
    bad.write_text("{nope")
    with pytest.raises(ConfigError, match="invalid JSON"):
        load_json_file(bad)

    listy = tmp_path / "list.json"
    listy.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        load_json_file(listy)
