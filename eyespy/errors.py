"""Exception hierarchy and process exit codes."""

from __future__ import annotations

import datetime as dt
from typing import Optional

SUCCESS = 0
GENERAL_ERROR = 1


class EyespyError(Exception):
    """Base error; carries the exit code the CLI should return."""

    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(EyespyError):
    """Raised for unusable tokens, config files, or blacklist patterns."""


class GitHubAPIError(EyespyError):
    """A request failed in transport or returned a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class RateLimitExhausted(GitHubAPIError):
    """No API calls remain until `reset` (UNIX timestamp)."""

    def __init__(self, reset: int, status: Optional[int] = None, url: Optional[str] = None):
        reset_at = dt.datetime.fromtimestamp(reset, tz=dt.timezone.utc)
        super().__init__(f"API Limit Reached! Reset on {reset_at.isoformat()}", status, url)
        self.reset = reset


__all__ = [
    "SUCCESS",
    "GENERAL_ERROR",
    "EyespyError",
    "ConfigError",
    "GitHubAPIError",
    "RateLimitExhausted",
]
