"""Tradier REST API layer.

Endpoint resolution, request encoding and construction, response
unwrapping, and the ``TradierClient`` resource methods built on them.
"""

from __future__ import annotations

from tradier.api.client import TradierClient
from tradier.api.endpoints import ENDPOINT_URLS, Endpoint, resolve
from tradier.api.factory import create_client
from tradier.api.models import (
    ConfigurationError,
    MarketClock,
    OrderAck,
    StreamSession,
    TradierError,
    TransportError,
    UnexpectedShapeError,
)
from tradier.api.request import RequestBuilder, RequestDescriptor
from tradier.api.transport import HttpxTransport, Transport
from tradier.api.unwrap import as_list, unwrap

__all__ = [
    "ConfigurationError",
    "ENDPOINT_URLS",
    "Endpoint",
    "HttpxTransport",
    "MarketClock",
    "OrderAck",
    "RequestBuilder",
    "RequestDescriptor",
    "StreamSession",
    "TradierClient",
    "TradierError",
    "Transport",
    "TransportError",
    "UnexpectedShapeError",
    "as_list",
    "create_client",
    "resolve",
    "unwrap",
]
