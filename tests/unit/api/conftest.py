"""Shared fixtures for API tests: a TradierClient wired to httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from tradier.api.client import TradierClient
from tradier.api.transport import HttpxTransport


class RecordingHandler:
    """httpx.MockTransport handler that records requests and returns a canned response."""

    def __init__(
        self,
        payload: Any = None,
        status_code: int = 200,
        text: Optional[str] = None,
    ) -> None:
        self.payload = payload
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def form(self) -> dict[str, str]:
        """Decode the last request's form body."""
        return dict(httpx.QueryParams(self.last.content.decode()))


ClientFactory = Callable[..., tuple[TradierClient, RecordingHandler]]


@pytest.fixture
def make_client() -> ClientFactory:
    """Build a client whose transport answers with a canned response.

    Returns (client, handler); the handler records every request.
    """

    def _make(
        payload: Any = None,
        status_code: int = 200,
        text: Optional[str] = None,
        endpoint: str = "prod",
        token: Optional[str] = "test-token",
    ) -> tuple[TradierClient, RecordingHandler]:
        handler = RecordingHandler(payload, status_code=status_code, text=text)
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = TradierClient(token, endpoint, transport=HttpxTransport(http))
        return client, handler

    return _make
