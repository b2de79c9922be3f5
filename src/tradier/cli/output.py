"""Rich output formatting for CLI commands."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradier.api.models import TradierError, TransportError, UnexpectedShapeError


def _to_jsonable(result: Any) -> Any:
    """Convert models (and lists of models) to plain JSON values."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def print_result(result: Any, console: Console) -> None:
    """Print a call result as highlighted JSON (raw text is printed as-is)."""
    if isinstance(result, str):
        console.print(result, markup=False, highlight=False)
        return
    console.print_json(json.dumps(_to_jsonable(result), default=str))


def print_record_count(series: Any, console: Console) -> None:
    """Print how many time-and-sales records a ``series`` payload holds."""
    data = series.get("data") if isinstance(series, dict) else None
    count = len(data) if isinstance(data, list) else int(data is not None)
    console.print(f"Records: {count}")


def print_error(error: TradierError, console: Console) -> None:
    """Print a client error, including the API's own error payload."""
    lines = [f"[bold red]{error.error_code}[/bold red]: {escape(error.message)}"]
    if isinstance(error, TransportError) and error.status_code is not None:
        lines.append(f"Status: {error.status_code}")
        detail = error.payload if error.payload is not None else error.body
        if detail:
            text = detail if isinstance(detail, str) else json.dumps(detail, indent=2)
            lines.append(escape(text))
    elif isinstance(error, UnexpectedShapeError):
        lines.append(escape(json.dumps(error.payload, indent=2, default=str)))
    console.print(Panel("\n".join(lines), title="Tradier error", expand=False))
