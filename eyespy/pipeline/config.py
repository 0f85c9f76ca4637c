"""Command-line parsing and run settings for the release scanner."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from ..errors import ConfigError
from ..retrieval.config import CONCURRENCY_LIMIT
from ..secrets import load_json_file, read_token
from .blacklist import Blacklist

USAGE_EPILOG = """\
config file format:
  {
    "orgs": ["Polymer"],
    "blacklist": {
      "Polymer": {"repos": ["docs"], "regex": ["^test-"]}
    }
  }
"""


@dataclass(frozen=True)
class RunSettings:
    """Resolved, immutable settings for one scan."""

    token: str
    orgs: Tuple[str, ...]
    blacklist: Blacklist
    verbose: bool = False
    details: bool = False
    concurrency: int = CONCURRENCY_LIMIT


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the scanner entry point."""

    parser = argparse.ArgumentParser(
        prog="eyespy",
        description="List GitHub repositories with commits past their latest version tag.",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-t", "--token", metavar="PATH", help="file holding a GitHub OAuth token")
    parser.add_argument("-c", "--config", metavar="PATH", help="JSON file listing orgs and blacklist")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress and API usage")
    parser.add_argument(
        "-d", "--details", action="store_true", help="also print the latest tag and its commit date"
    )
    parser.add_argument("-h", "-?", "--help", action="help", help="show this help message and exit")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    return build_arg_parser().parse_args(argv)


def parse_orgs(config: Mapping[str, Any]) -> Tuple[str, ...]:
    orgs = config.get("orgs")
    if not isinstance(orgs, list) or not orgs or not all(isinstance(o, str) and o for o in orgs):
        raise ConfigError("config 'orgs' must be a non-empty list of organization names")
    return tuple(orgs)


def resolve_settings(args: argparse.Namespace) -> RunSettings:
    """Load token and config files named on the command line."""

    if not args.token:
        raise ConfigError("missing --token PATH")
    if not args.config:
        raise ConfigError("missing --config PATH")

    token = read_token(args.token)
    config = load_json_file(args.config)
    return RunSettings(
        token=token,
        orgs=parse_orgs(config),
        blacklist=Blacklist.from_config(config.get("blacklist")),
        verbose=bool(args.verbose),
        details=bool(args.details),
    )


__all__ = [
    "RunSettings",
    "build_arg_parser",
    "parse_args",
    "parse_orgs",
    "resolve_settings",
]
