"""Query-string and form-body encoding.

Parameters whose value is ``None`` are treated as absent and never reach
the wire. Booleans are written the way the API spells them (``true`` /
``false``), and sequence values repeat their key.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union
from urllib.parse import parse_qs, urlencode

Params = Mapping[str, Any]
Symbols = Union[str, Iterable[str]]


def parse_symbols(symbols: Optional[Symbols]) -> Optional[str]:
    """Normalize one symbol or many into a single comma-joined string.

    >>> parse_symbols("AAPL")
    'AAPL'
    >>> parse_symbols(["AAPL", "MSFT"])
    'AAPL,MSFT'
    """
    if symbols is None:
        return None
    if isinstance(symbols, str):
        return symbols
    return ",".join(str(s) for s in symbols)


def _format_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_format_value(v) for v in value if v is not None]
    return value


def decode(data: str) -> dict[str, Any]:
    """Decode a form/query string into a parameter bag."""
    return {
        key: values[0] if len(values) == 1 else values
        for key, values in parse_qs(data, keep_blank_values=True).items()
    }


def clean_params(params: Union[Params, str, None]) -> dict[str, Any]:
    """Drop absent values and format the rest for encoding.

    ``params`` may already be encoded; it is decoded first so the same
    rules apply to either representation.
    """
    if isinstance(params, str):
        params = decode(params)
    if not params:
        return {}
    return {
        key: _format_value(value)
        for key, value in params.items()
        if value is not None
    }


def encode(params: Union[Params, str, None]) -> str:
    """URL-encode a parameter bag; an empty bag encodes to ``""``."""
    return urlencode(clean_params(params), doseq=True)


def with_query(path: str, params: Union[Params, str, None]) -> str:
    """Append the encoded query to ``path`` when there is one."""
    query = encode(params)
    return f"{path}?{query}" if query else path
