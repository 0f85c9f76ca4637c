"""Release scanner pipeline: repos -> latest tags -> commits ahead."""

from .runner import main, search

__all__ = ["main", "search"]
