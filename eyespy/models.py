"""Records passed between pipeline stages."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RepoRef:
    """A repository in a scanned organization; identity is (org, name)."""

    org: str
    name: str
    default_branch: str = field(default="master", compare=False)

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.name}"


@dataclass(frozen=True)
class TagRef:
    repo: RepoRef
    name: str
    sha: Optional[str] = None


@dataclass(frozen=True)
class ComparisonResult:
    """How far a repository's default branch has moved past its latest tag."""

    repo: RepoRef
    commits_ahead: int
    tag: str
    tagged_at: Optional[str] = None


@dataclass(frozen=True)
class RateStatus:
    """Snapshot of the core REST quota."""

    limit: int
    remaining: int
    reset: int

    @property
    def reset_at(self) -> dt.datetime:
        return dt.datetime.fromtimestamp(self.reset, tz=dt.timezone.utc)


__all__ = ["RepoRef", "TagRef", "ComparisonResult", "RateStatus"]
