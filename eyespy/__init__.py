"""Report GitHub repositories with commits past their latest version tag."""

__version__ = "0.1.0"
