"""Plain-text report lines and highlighted error output."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from ..models import ComparisonResult, RateStatus


def needs_release(results: Iterable[ComparisonResult]) -> List[ComparisonResult]:
    """Drop repositories whose default branch has no commits past the tag."""
    return [r for r in results if r.commits_ahead]


def format_result(result: ComparisonResult, details: bool = False) -> str:
    line = f"{result.repo.full_name}\t{result.commits_ahead}"
    if details:
        line += f"\t{result.tag}\t{result.tagged_at or '-'}"
    return line


def print_report(results: Iterable[ComparisonResult], details: bool = False) -> int:
    """Print one line per repository needing a release; return how many."""
    shown = needs_release(results)
    for result in shown:
        print(format_result(result, details))
    return len(shown)


def print_quota(before: Optional[RateStatus], after: RateStatus) -> None:
    print(f"[info] remaining API calls: {after.remaining}", file=sys.stderr)
    if before is not None:
        print(f"[info] used: {before.remaining - after.remaining}", file=sys.stderr)


def print_error(exc: BaseException) -> None:
    Console(stderr=True, highlight=False).print(f"[bold red]error:[/bold red] {escape(str(exc))}", soft_wrap=True)


__all__ = ["needs_release", "format_result", "print_report", "print_quota", "print_error"]
