"""Backend package for property listings"""

__all__ = [
    "app",
    "config",
    "data_loader",
    "db",
    "fetcher",
    "filters",
    "format",
    "listings",
    "pagination",
    "parsing",
    "schemas",
    "sorting",
    "summary",
    "users",
    "view_state",
]
