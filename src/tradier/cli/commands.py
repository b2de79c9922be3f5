"""Command table mapping CLI action names to client calls.

Every action the ``call`` command accepts is listed here explicitly;
positional CLI parameters are passed through to the handler as strings.
"""

from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Sequence

from tradier.api.client import TradierClient

Handler = Callable[..., Awaitable[Any]]


def _quote(client: TradierClient, symbols: str, *rest: str) -> Awaitable[Any]:
    return client.get_quote(symbols.split(","), *rest)


_COMMANDS: dict[str, Handler] = {
    # User data
    "get_profile": TradierClient.get_profile,
    "get_balances": TradierClient.get_balances,
    "get_positions": TradierClient.get_positions,
    "get_history": TradierClient.get_history,
    "get_gainloss": TradierClient.get_gainloss,
    "get_orders": TradierClient.get_orders,
    # Account data
    "get_account_balances": TradierClient.get_account_balances,
    "get_account_positions": TradierClient.get_account_positions,
    "get_account_history": TradierClient.get_account_history,
    "get_account_gainloss": TradierClient.get_account_gainloss,
    "get_account_orders": TradierClient.get_account_orders,
    "get_account_order": TradierClient.get_account_order,
    # Trading
    "create_order": TradierClient.create_order,
    "preview_order": TradierClient.preview_order,
    "change_order": TradierClient.change_order,
    "cancel_order": TradierClient.cancel_order,
    # Market data
    "quote": _quote,
    "get_quote": _quote,
    "timesales": TradierClient.get_timesales,
    "get_timesales": TradierClient.get_timesales,
    "get_option_chains": TradierClient.get_option_chains,
    "get_option_strikes": TradierClient.get_option_strikes,
    "get_option_expirations": TradierClient.get_option_expirations,
    "get_price_history": TradierClient.get_price_history,
    "get_clock": TradierClient.get_clock,
    "get_calendar": TradierClient.get_calendar,
    "search": TradierClient.search,
    "lookup": TradierClient.lookup,
    # Fundamentals
    "get_company": TradierClient.get_company,
    "get_calendars": TradierClient.get_calendars,
    "get_dividends": TradierClient.get_dividends,
    "get_corporate_actions": TradierClient.get_corporate_actions,
    "get_ratios": TradierClient.get_ratios,
    "get_financials": TradierClient.get_financials,
    "get_statistics": TradierClient.get_statistics,
    # Watchlists
    "get_watchlists": TradierClient.get_watchlists,
    "get_watchlist": TradierClient.get_watchlist,
    "create_watchlist": TradierClient.create_watchlist,
    "update_watchlist": TradierClient.update_watchlist,
    "delete_watchlist": TradierClient.delete_watchlist,
    "add_symbols": TradierClient.add_symbols,
    "remove_symbols": TradierClient.remove_symbols,
    # Streaming
    "create_session": TradierClient.create_session,
    "get_events": TradierClient.get_events,
}

COMMANDS: Mapping[str, Handler] = MappingProxyType(_COMMANDS)


def get_command(name: str) -> Handler:
    """Get the handler for an action name.

    Raises:
        ValueError: If the action is not in the table
    """
    if name not in COMMANDS:
        raise ValueError(f"Unknown action: '{name}'")
    return COMMANDS[name]


def list_commands() -> list[str]:
    """Sorted list of action names."""
    return sorted(COMMANDS)


def check_arguments(handler: Handler, params: Sequence[str]) -> None:
    """Check that ``params`` fit the handler after its client argument.

    Raises:
        ValueError: If there are too few or too many parameters
    """
    try:
        inspect.signature(handler).bind(None, *params)
    except TypeError as e:
        raise ValueError(f"Bad parameters for '{handler.__name__}': {e}") from e
