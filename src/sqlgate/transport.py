"""HTTP transport, the single "POST a JSON body, get a JSON body" primitive."""

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from sqlgate.config import get_timeout
from sqlgate.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Capability used by every gateway call."""

    async def post(self, url: str, body: bytes) -> Any:
        """POST ``body`` as JSON and return the parsed JSON response.

        Raises TransportError on network failure or non-2xx status.
        """
        ...

    async def close(self) -> None:
        """Release resources."""
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    The client is created lazily on first use unless one is injected. Timeouts
    come from SQLGATE_TIMEOUT unless given explicitly.
    """

    def __init__(
        self, http_client: httpx.AsyncClient | None = None, *, timeout: float | None = None
    ) -> None:
        """Initialize with an optional HTTP client and timeout in seconds."""
        self._http = http_client
        self._timeout = timeout

    async def post(self, url: str, body: bytes) -> Any:
        """POST ``body`` and return the decoded JSON response."""
        client = self._get_client()
        timeout = self._timeout if self._timeout is not None else get_timeout()
        try:
            resp = await client.post(
                url,
                content=body,
                headers={"Content-Type": "application/json"},
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if resp.is_error:
            message = resp.text.strip() or resp.reason_phrase
            logger.debug("Gateway returned %s: %s", resp.status_code, message)
            raise TransportError(
                f"HTTP {resp.status_code}: {message}", status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"response is not valid JSON: {e}") from e

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if open."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
