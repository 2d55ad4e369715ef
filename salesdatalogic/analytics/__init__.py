"""Analytics and computational operations."""

from . import series, projection, comparison, profiles, summary, insights, dashboard

__all__ = [
    "series",
    "projection",
    "comparison",
    "profiles",
    "summary",
    "insights",
    "dashboard",
]
