"""GitHub REST access: HTTP client, pagination, and endpoint wrappers."""
