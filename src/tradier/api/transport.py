"""Network step: send a ``RequestDescriptor`` and return the response."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from tradier.api.models import TransportError
from tradier.api.request import RequestDescriptor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0


@runtime_checkable
class Transport(Protocol):
    """Anything that can send a described request asynchronously."""

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        """Send ``request`` and return a 2xx response.

        Raises:
            TransportError: On network failure, timeout, or non-2xx status.
        """
        ...

    async def aclose(self) -> None:
        """Release any connections held by the transport."""
        ...


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class HttpxTransport:
    """``Transport`` backed by ``httpx.AsyncClient``.

    An injected client is left open on ``aclose``; a client created here
    is owned and closed by the transport.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", request.method, request.url, e)
            raise TransportError(
                "timeout", f"{request.method} {request.url} timed out: {e}"
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", request.method, request.url, e)
            raise TransportError(
                "network_error", f"{request.method} {request.url} failed: {e}"
            ) from e

        if not response.is_success:
            logger.warning(
                "%s %s returned HTTP %d", request.method, request.url, response.status_code
            )
            raise TransportError(
                "http_error",
                f"HTTP {response.status_code}: {response.text[:400]}",
                status_code=response.status_code,
                body=response.text,
                payload=_parse_json(response),
            )
        return response

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
