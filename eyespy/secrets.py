"""Utilities for loading the OAuth token and the JSON run configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigError


def _resolve(path: str | Path, what: str) -> Path:
    resolved = Path(path).expanduser()
    if not resolved.is_file():
        raise ConfigError(f"{what} file not found: {resolved}")
    return resolved


def read_token(path: str | Path) -> str:
    """Return the stripped token stored in `path`; an empty file is an error."""

    token_path = _resolve(path, "token")
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigError(f"unable to read token file {token_path}: {exc}") from exc
    if not token:
        raise ConfigError(f"token file is empty: {token_path}")
    return token


def load_json_file(path: str | Path) -> Dict[str, Any]:
    """Load a JSON object from disk, raising ConfigError on any problem."""

    json_path = _resolve(path, "config")
    try:
        with json_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigError(f"unable to read config file {json_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {json_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file must hold a JSON object: {json_path}")
    return data


__all__ = ["read_token", "load_json_file"]
