"""Central configuration constants for talking to the GitHub REST API."""

from __future__ import annotations

import os

USER_AGENT = "eyespy-release-scanner/0.1"
BASE_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
PER_PAGE = 100
REQUEST_TIMEOUT = int(os.getenv("EYESPY_REQUEST_TIMEOUT", "90"))
MAX_CONCURRENCY = 20
# EYESPY_CONCURRENCY can only lower the cap
CONCURRENCY_LIMIT = min(MAX_CONCURRENCY, max(1, int(os.getenv("EYESPY_CONCURRENCY", str(MAX_CONCURRENCY)))))
DEFAULT_HEAD = "master"

__all__ = [
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_CONCURRENCY",
    "CONCURRENCY_LIMIT",
    "DEFAULT_HEAD",
]
