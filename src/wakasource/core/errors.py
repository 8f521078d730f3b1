"""Error taxonomy for a single source run."""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "InvalidConfiguration",
    "InvalidResponse",
    "TransportFailure",
    "UpstreamError",
    "WakaSourceError",
]


class WakaSourceError(Exception):
    """Base exception for wakasource operations."""

    kind = "WakaSourceError"


class ConfigError(WakaSourceError):
    """Raised when configuration is missing or invalid."""

    kind = "InvalidConfiguration"


class InvalidConfiguration(ConfigError):
    """Unparseable timespan or missing credential.

    Always raised before any network call is made.
    """

    pass


class UpstreamError(WakaSourceError):
    """The summaries response carried a populated ``error`` field."""

    kind = "UpstreamError"


class InvalidResponse(WakaSourceError):
    """The summaries body does not have the expected shape."""

    kind = "InvalidResponse"


class TransportFailure(WakaSourceError):
    """Network or HTTP failure talking to the summaries endpoint."""

    kind = "TransportFailure"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
