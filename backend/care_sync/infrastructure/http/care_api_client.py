"""Care backend API client — thin httpx wrapper shared by every gateway.

Translates transport failures and non-2xx answers into the domain errors of
``care_sync.domain.exceptions`` so the synchronization core never sees httpx.
"""

import logging
from typing import Any

import httpx

from care_sync.domain.exceptions import NetworkError, ServerError, SessionExpiredError

logger = logging.getLogger(__name__)


class CareApiClient:
    """Infrastructure adapter — connects to the care records REST backend.

    An injected ``httpx.AsyncClient`` is reused and left open; without one,
    a short-lived client is created per request.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        *,
        token: str = "",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty)."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        client = await self._get_client()
        should_close = self._http_client is None

        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = await client.request(
                method, url, headers=self._get_headers(), json=json, params=params
            )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Could not reach the server: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if response.status_code == 401:
            raise SessionExpiredError(self._error_message(response) or "Session expired")
        if not response.is_success:
            self._raise_server_error(response)
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        text = response.text.strip()
        if response.status_code == 204 or not text:
            return None
        # A proxy or SPA fallback answering instead of the API
        if text.startswith("<!DOCTYPE") or text.startswith("<html"):
            raise ServerError(
                response.status_code,
                "The server returned an HTML page instead of JSON (routing or authentication problem)",
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(response.status_code, "Could not parse the server response") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict):
            message = data.get("message") or data.get("error")
            if isinstance(message, str):
                return message
        return None

    def _raise_server_error(self, response: httpx.Response) -> None:
        """Raise ServerError from a non-2xx httpx Response."""
        message = self._error_message(response)
        if message is None:
            message = response.text.strip() or response.reason_phrase
        logger.warning("Backend answered %d: %s", response.status_code, message)
        raise ServerError(response.status_code, message)
