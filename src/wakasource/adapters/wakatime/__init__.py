"""WakaTime API adapter."""

from .client import DEFAULT_BASE_URL, SUMMARIES_PATH, WakaTimeClient, build_authorization

__all__ = [
    "DEFAULT_BASE_URL",
    "SUMMARIES_PATH",
    "WakaTimeClient",
    "build_authorization",
]
