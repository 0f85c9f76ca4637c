"""Per-organization repository exclusion rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional, Pattern, Tuple

from ..errors import ConfigError
from ..models import RepoRef


@dataclass(frozen=True)
class BlacklistRule:
    repos: FrozenSet[str] = frozenset()
    patterns: Tuple[Pattern[str], ...] = ()

    def matches(self, name: str) -> bool:
        if name in self.repos:
            return True
        return any(rgx.search(name) for rgx in self.patterns)


def _string_list(org: str, key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"blacklist.{org}.{key} must be a list of strings")
    return tuple(value)


def compile_rule(org: str, entry: Mapping[str, Any]) -> BlacklistRule:
    """Build the rule for one org, compiling its regex strings."""
    if not isinstance(entry, Mapping):
        raise ConfigError(f"blacklist.{org} must be an object with 'repos' and/or 'regex'")
    patterns = []
    for source in _string_list(org, "regex", entry.get("regex")):
        try:
            patterns.append(re.compile(source))
        except re.error as exc:
            raise ConfigError(f"invalid blacklist regex for {org}: {source!r} ({exc})") from exc
    return BlacklistRule(
        repos=frozenset(_string_list(org, "repos", entry.get("repos"))),
        patterns=tuple(patterns),
    )


class Blacklist:
    """Decides which repositories are skipped before any tag lookups."""

    def __init__(self, rules: Optional[Dict[str, BlacklistRule]] = None) -> None:
        self._rules: Dict[str, BlacklistRule] = dict(rules or {})

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "Blacklist":
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise ConfigError("blacklist must be an object keyed by organization")
        return cls({org: compile_rule(org, entry) for org, entry in config.items()})

    def __bool__(self) -> bool:
        return bool(self._rules)

    def rule_for(self, org: str) -> Optional[BlacklistRule]:
        return self._rules.get(org)

    def is_blacklisted(self, repo: RepoRef) -> bool:
        rule = self._rules.get(repo.org)
        if rule is None:
            return False
        return rule.matches(repo.name)

    __call__ = is_blacklisted


__all__ = ["Blacklist", "BlacklistRule", "compile_rule"]
