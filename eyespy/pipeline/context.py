"""The explicit state every pipeline stage receives."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable

from ..retrieval.http_client import GitHubClient
from .config import RunSettings


def quiet(_msg: str) -> None:
    pass


def stderr_logger(msg: str) -> None:
    print(f"[info] {msg}", file=sys.stderr)


@dataclass(frozen=True)
class RunContext:
    """Client, settings, and logger for one run, built once in `main`."""

    client: GitHubClient
    settings: RunSettings
    log: Callable[[str], None] = field(default=quiet)

    @classmethod
    def create(cls, settings: RunSettings, client: GitHubClient) -> "RunContext":
        return cls(client=client, settings=settings, log=stderr_logger if settings.verbose else quiet)


__all__ = ["RunContext", "quiet", "stderr_logger"]
