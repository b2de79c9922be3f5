"""Error hierarchy and typed response models.

The models are frozen and tolerate extra fields, since the API adds
attributes over time and the client passes them through untouched.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TradierError(Exception):
    """Base exception for all client failures.

    Attributes:
        error_code: Machine-readable error code (e.g. ``"http_error"``).
        message: Human-readable error description.
    """

    def __init__(self, error_code: str, message: str) -> None:
        self.error_code: str = error_code
        self.message: str = message
        super().__init__(f"{error_code}: {message}")


class ConfigurationError(TradierError):
    """Raised for an unknown endpoint name or an unsupported HTTP verb."""

    def __init__(self, message: str) -> None:
        super().__init__("configuration_error", message)


class TransportError(TradierError):
    """Raised on network failure, timeout, or a non-2xx response.

    Attributes:
        status_code: HTTP status, or ``None`` when no response arrived.
        body: Raw response text as sent by the API.
        payload: Parsed JSON body, when the body was JSON.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        payload: Any = None,
    ) -> None:
        self.status_code: Optional[int] = status_code
        self.body: Optional[str] = body
        self.payload: Any = payload
        super().__init__(error_code, message)


class UnexpectedShapeError(TradierError):
    """Raised when a response lacks the envelope key being unwrapped.

    Attributes:
        payload: The raw decoded response.
        keys: The key path that could not be followed.
    """

    def __init__(self, message: str, payload: Any, keys: tuple[str, ...]) -> None:
        self.payload: Any = payload
        self.keys: tuple[str, ...] = keys
        super().__init__("unexpected_shape", message)


class OrderAck(BaseModel):
    """Acknowledgement returned by create, change and cancel order calls."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int = Field(description="Broker-assigned order identifier")
    status: str = Field(description="Request status, usually 'ok'")
    partner_id: Optional[str] = Field(default=None, description="Partner identifier")


class MarketClock(BaseModel):
    """Current market state.

    Attributes:
        date: Trading date (``YYYY-MM-DD``).
        description: Human-readable state, e.g. ``"Market is open from 09:30 to 16:00"``.
        state: One of ``premarket``, ``open``, ``postmarket``, ``closed``.
        timestamp: Epoch seconds of the reading.
        next_change: Time of the next state change (``HH:MM``).
        next_state: State after the next change.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    date: str
    description: str
    state: str
    timestamp: int
    next_change: Optional[str] = None
    next_state: Optional[str] = None


class StreamSession(BaseModel):
    """Streaming session handed out by ``markets/events/session``."""

    model_config = ConfigDict(frozen=True, extra="allow")

    url: str = Field(description="Streaming URL the session is valid for")
    sessionid: str = Field(description="Session identifier for events requests")
