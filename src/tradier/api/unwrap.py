"""Response unwrapping.

Every resource wraps its payload in one or two envelope keys, e.g.
``{"quotes": {"quote": ...}}``. The value found at the end of the key path
is returned as the API sent it: a single result is usually an object and
several results a list under the same key, and callers must handle both
(``as_list`` is there for those who want one shape).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from tradier.api.models import UnexpectedShapeError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Envelope key paths by resource kind.
ENVELOPES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "profile": ("profile",),
        "user": ("accounts", "account"),
        "balances": ("balances",),
        "positions": ("positions", "position"),
        "history": ("history", "event"),
        "gainloss": ("gainloss", "closed_position"),
        "orders": ("orders", "order"),
        "order": ("order",),
        "quotes": ("quotes", "quote"),
        "timesales": ("series",),
        "option_chains": ("options", "option"),
        "option_strikes": ("strikes", "strike"),
        "option_expirations": ("expirations", "date"),
        "price_history": ("history", "day"),
        "clock": ("clock",),
        "calendar": ("calendar",),
        "securities": ("securities", "security"),
        "fundamentals": (),
        "watchlists": ("watchlists", "watchlist"),
        "watchlist": ("watchlist",),
        "session": ("stream",),
    }
)

# The API writes an empty collection as the string "null".
_EMPTY = (None, "null")


def _error_messages(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors")
    if isinstance(errors, dict):
        errors = errors.get("error")
    if errors is None:
        return []
    if not isinstance(errors, list):
        errors = [errors]
    return [str(e) for e in errors]


def unwrap(payload: Any, *keys: str) -> Any:
    """Descend through ``keys`` and return what the API put there.

    Returns ``None`` when an envelope holds the API's empty marker.

    Raises:
        UnexpectedShapeError: If a key is missing or the value on the path
            is not an object. The raw payload is attached.
    """
    value = payload
    for depth, key in enumerate(keys):
        if not isinstance(value, dict) or key not in value:
            path = ".".join(keys[: depth + 1])
            messages = _error_messages(payload)
            detail = f": {'; '.join(messages)}" if messages else ""
            raise UnexpectedShapeError(
                f"Response has no '{path}'{detail}", payload=payload, keys=keys
            )
        value = value[key]
        if value in _EMPTY:
            return None
    return value


def unwrap_resource(kind: str, payload: Any) -> Any:
    """Unwrap ``payload`` using the envelope registered for ``kind``."""
    return unwrap(payload, *ENVELOPES[kind])


def unwrap_model(model: type[ModelT], kind: str, payload: Any) -> ModelT:
    """Unwrap ``payload`` and validate the result as ``model``.

    Raises:
        UnexpectedShapeError: If the envelope is missing, empty, or does
            not fit ``model``
    """
    keys = ENVELOPES[kind]
    value = unwrap(payload, *keys)
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise UnexpectedShapeError(
            f"Response '{'.'.join(keys)}' is not a valid {model.__name__}: {e.error_count()} error(s)",
            payload=payload,
            keys=keys,
        ) from e


def as_list(value: Any) -> list[Any]:
    """Coerce an unwrapped value to a list (``None`` becomes ``[]``)."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
