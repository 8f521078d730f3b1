"""WakaTime summaries API client.

One GET per run; no retries, no pagination.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any

import httpx

from ...core.errors import InvalidConfiguration, InvalidResponse, TransportFailure, UpstreamError
from ...core.schemas import SummariesResponse, ValidationError

if TYPE_CHECKING:
    from ...rollups.time_windows import DateWindow

__all__ = [
    "DEFAULT_BASE_URL",
    "SUMMARIES_PATH",
    "WakaTimeClient",
    "build_authorization",
]

DEFAULT_BASE_URL = "https://wakatime.com/api/v1"
SUMMARIES_PATH = "/users/current/summaries"


def build_authorization(api_key: str) -> str:
    """Encode the API key as a Basic ``Authorization`` header value.

    Example
    -------
    >>> build_authorization("waka_123")
    'Basic d2FrYV8xMjM='
    """
    if not api_key:
        raise InvalidConfiguration("WakaTime API key is required")
    encoded = base64.b64encode(api_key.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


class WakaTimeClient:
    """Client for ``GET /users/current/summaries``."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize WakaTime client.

        Parameters
        ----------
        api_key
            Secret API key from wakatime.com/settings/account
        base_url
            API base URL
        timeout
            Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _make_headers(self) -> dict[str, str]:
        """Create request headers."""
        return {
            "Authorization": build_authorization(self.api_key),
            "Accept": "application/json",
        }

    def summaries_url(self) -> str:
        return f"{self.base_url}{SUMMARIES_PATH}"

    def fetch_raw(self, start: str, end: str) -> tuple[int, dict[str, Any]]:
        """Issue the request and decode the JSON body.

        Returns
        -------
        tuple[int, dict]
            HTTP status code and decoded body

        Raises
        ------
        TransportFailure
            On network errors, timeouts or a non-JSON body
        """
        headers = self._make_headers()

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(
                    self.summaries_url(),
                    params={"start": start, "end": end},
                    headers=headers,
                )
        except httpx.TimeoutException as exc:
            raise TransportFailure(f"WakaTime request timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(f"WakaTime HTTP error: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportFailure(
                f"WakaTime returned a non-JSON body ({response.status_code})",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise TransportFailure(
                f"WakaTime returned an unexpected body ({response.status_code})",
                status_code=response.status_code,
            )

        return response.status_code, body

    def fetch_summaries(self, start: str, end: str) -> SummariesResponse:
        """Fetch daily summaries for ``start``..``end`` (``YYYY-MM-DD``).

        Raises
        ------
        UpstreamError
            If the body carries an ``error`` field
        TransportFailure
            On network errors or an error status without an ``error`` field
        InvalidResponse
            If the body does not match the summaries schema
        """
        status_code, body = self.fetch_raw(start, end)

        error = body.get("error")
        if error:
            raise UpstreamError(str(error))

        if status_code >= 400:
            raise TransportFailure(f"WakaTime API error ({status_code})", status_code=status_code)

        try:
            return SummariesResponse.model_validate(body)
        except ValidationError as exc:
            raise InvalidResponse(f"Malformed summaries response: {exc}") from exc

    def fetch_window(self, window: DateWindow) -> SummariesResponse:
        """Fetch daily summaries for a resolved window."""
        return self.fetch_summaries(window.start, window.end)
