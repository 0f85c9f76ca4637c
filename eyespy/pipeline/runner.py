"""Entry points for scanning organizations for repositories that need a release."""

from __future__ import annotations

import sys
from typing import List, Optional

from ..errors import SUCCESS, EyespyError, GitHubAPIError, RateLimitExhausted
from ..models import ComparisonResult, RateStatus, RepoRef, TagRef
from ..retrieval.collectors import compare_tag, get_rate_limit, list_org_repos, list_tags, select_latest_tag
from ..retrieval.http_client import GitHubClient
from .concurrency import bounded_map
from .config import build_arg_parser, parse_args, resolve_settings
from .context import RunContext
from .report import print_error, print_quota, print_report


def check_rate_limit(ctx: RunContext) -> RateStatus:
    """Read the quota up front and refuse to start when none is left."""
    limits = get_rate_limit(ctx.client)
    ctx.log(f"rate limit: {limits.remaining}/{limits.limit} remaining, resets {limits.reset_at.isoformat()}")
    if limits.remaining == 0:
        raise RateLimitExhausted(limits.reset)
    return limits


def list_repositories(ctx: RunContext) -> List[RepoRef]:
    """Stage 1: non-blacklisted public repos, in org order then page order."""
    ctx.log("getting repos")
    blacklist = ctx.settings.blacklist
    per_org = bounded_map(
        lambda org: list_org_repos(ctx.client, org, blacklist),
        ctx.settings.orgs,
        ctx.settings.concurrency,
    )
    return [repo for repos in per_org for repo in repos]


def list_latest_tags(ctx: RunContext, repos: List[RepoRef]) -> List[TagRef]:
    """Stage 2: the latest version tag of each repo; untagged repos drop out."""
    ctx.log(f"getting tags for {len(repos)} repos")
    per_repo = bounded_map(lambda repo: list_tags(ctx.client, repo), repos, ctx.settings.concurrency)
    latest: List[TagRef] = []
    for repo, tags in zip(repos, per_repo):
        tag = select_latest_tag(tags)
        if tag is None:
            if tags:
                ctx.log(f"skipping {repo.full_name}: none of its {len(tags)} tags is a version")
            continue
        latest.append(tag)
    return latest


def count_commits_ahead(ctx: RunContext, tags: List[TagRef]) -> List[ComparisonResult]:
    """Stage 3: commits on each default branch past its latest tag."""
    ctx.log("checking commits after latest tag")
    details = ctx.settings.details
    return bounded_map(lambda tag: compare_tag(ctx.client, tag, details), tags, ctx.settings.concurrency)


def search(ctx: RunContext) -> List[ComparisonResult]:
    """Run all stages; the first error anywhere aborts the whole search."""
    repos = list_repositories(ctx)
    latest = list_latest_tags(ctx, repos)
    return count_commits_ahead(ctx, latest)


def report_usage(ctx: RunContext, before: RateStatus) -> None:
    try:
        after = get_rate_limit(ctx.client)
    except GitHubAPIError as exc:
        print(f"[warn] unable to read rate limit after run: {exc}", file=sys.stderr)
        return
    print_quota(before, after)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        build_arg_parser().print_help()
        return SUCCESS

    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
        ctx = RunContext.create(settings, GitHubClient(settings.token))
        before = check_rate_limit(ctx)
    except EyespyError as exc:
        print_error(exc)
        return exc.exit_code

    status = SUCCESS
    try:
        results = search(ctx)
    except EyespyError as exc:
        print_error(exc)
        status = exc.exit_code
    else:
        print_report(results, settings.details)

    if settings.verbose:
        report_usage(ctx, before)
    return status


if __name__ == "__main__":
    sys.exit(main())
