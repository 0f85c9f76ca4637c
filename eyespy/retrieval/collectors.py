"""Endpoint wrappers for repositories, tags, comparisons, and quota."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote

import semver

from ..errors import GitHubAPIError
from ..models import ComparisonResult, RateStatus, RepoRef, TagRef
from .config import DEFAULT_HEAD
from .http_client import GitHubClient


def _repo_path(repo: RepoRef) -> str:
    return f"repos/{quote(repo.org, safe='')}/{quote(repo.name, safe='')}"


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def repo_from_payload(org: str, payload: Dict[str, Any]) -> Optional[RepoRef]:
    """Map one entry of the org repo listing; entries without a name map to None."""
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        return None
    owner = _obj(payload.get("owner")).get("login") or org
    return RepoRef(org=owner, name=name, default_branch=payload.get("default_branch") or DEFAULT_HEAD)


def list_org_repos(
    client: GitHubClient,
    org: str,
    exclude: Optional[Callable[[RepoRef], bool]] = None,
) -> List[RepoRef]:
    """Return every public repository of `org`, minus those `exclude` rejects."""

    def transform(page: List[Dict[str, Any]]) -> List[Optional[RepoRef]]:
        repos = [repo_from_payload(org, entry) for entry in page or []]
        return [r for r in repos if r and not (exclude and exclude(r))]

    return client.paged_get(f"orgs/{quote(org, safe='')}/repos", transform, params={"type": "public"})


def list_tags(client: GitHubClient, repo: RepoRef) -> List[TagRef]:
    """Return all tags of `repo` in listing order."""

    def transform(page: List[Dict[str, Any]]) -> List[Optional[TagRef]]:
        return [
            TagRef(repo=repo, name=entry["name"], sha=_obj(entry.get("commit")).get("sha"))
            if isinstance(entry.get("name"), str) and entry["name"] else None
            for entry in page or []
        ]

    return client.paged_get(f"{_repo_path(repo)}/tags", transform)


def parse_version(name: str) -> Optional[semver.Version]:
    """Parse a tag name as a semantic version; a leading `v` is accepted."""
    candidate = name[1:] if name[:1] in ("v", "V") else name
    try:
        return semver.Version.parse(candidate)
    except (ValueError, TypeError):
        return None


def select_latest_tag(tags: Sequence[TagRef]) -> Optional[TagRef]:
    """Pick the tag with the highest version; the first one listed wins ties.

    Tags whose names do not parse as versions are ignored, so a repository
    with only such tags has no latest tag.
    """
    latest: Optional[TagRef] = None
    latest_version: Optional[semver.Version] = None
    for tag in tags:
        version = parse_version(tag.name)
        if version is None:
            continue
        if latest_version is None or version > latest_version:
            latest, latest_version = tag, version
    return latest


def compare_commits(client: GitHubClient, tag: TagRef, head: Optional[str] = None) -> int:
    """Number of commits on `head` (default branch) that are not in `tag`."""
    head = head or tag.repo.default_branch or DEFAULT_HEAD
    basehead = f"{quote(tag.name, safe='')}...{quote(head, safe='')}"
    payload = client.get_json(f"{_repo_path(tag.repo)}/compare/{basehead}")
    ahead = payload.get("ahead_by")
    if not isinstance(ahead, int):
        raise GitHubAPIError(f"compare {tag.repo.full_name} {basehead}: missing ahead_by in response")
    return ahead


def get_commit_date(client: GitHubClient, repo: RepoRef, sha: str) -> Optional[str]:
    """Committer date of `sha` as the ISO string GitHub returns."""
    payload = client.get_json(f"{_repo_path(repo)}/commits/{sha}")
    commit = _obj(payload.get("commit"))
    return _obj(commit.get("committer")).get("date") or _obj(commit.get("author")).get("date")


def compare_tag(client: GitHubClient, tag: TagRef, with_date: bool = False) -> ComparisonResult:
    """Build the ComparisonResult for one selected tag."""
    ahead = compare_commits(client, tag)
    tagged_at = get_commit_date(client, tag.repo, tag.sha) if with_date and tag.sha else None
    return ComparisonResult(repo=tag.repo, commits_ahead=ahead, tag=tag.name, tagged_at=tagged_at)


def get_rate_limit(client: GitHubClient) -> RateStatus:
    """Read the core REST quota; this endpoint does not count against it."""
    resources = client.get_json("rate_limit").get("resources")
    core = resources.get("core") if isinstance(resources, dict) else None
    if not isinstance(core, dict) or "remaining" not in core:
        raise GitHubAPIError(f"malformed rate limit payload: missing resources.core.remaining ({core!r})")
    try:
        return RateStatus(
            limit=int(core.get("limit") or 0),
            remaining=int(core["remaining"]),
            reset=int(core.get("reset") or 0),
        )
    except (TypeError, ValueError) as exc:
        raise GitHubAPIError(f"malformed rate limit payload: {core!r}") from exc


__all__ = [
    "repo_from_payload",
    "list_org_repos",
    "list_tags",
    "parse_version",
    "select_latest_tag",
    "compare_commits",
    "get_commit_date",
    "compare_tag",
    "get_rate_limit",
]
