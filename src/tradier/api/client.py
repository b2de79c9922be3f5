"""Tradier API client.

Each resource method issues exactly one request through the builder and
transport, then unwraps the resource's envelope. Nothing is validated
locally; the API's own error responses are passed back to the caller.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from tradier.api.encoding import Params, Symbols, clean_params, parse_symbols
from tradier.api.endpoints import Endpoint, resolve
from tradier.api.models import (
    MarketClock,
    OrderAck,
    StreamSession,
    UnexpectedShapeError,
)
from tradier.api.request import RequestBuilder
from tradier.api.transport import HttpxTransport, Transport
from tradier.api.unwrap import unwrap_model, unwrap_resource


OrderData = Union[Params, str]


class TradierClient:
    """Asynchronous client for the Tradier brokerage API.

    The token and endpoint are fixed at construction, so one client can
    serve any number of concurrent calls. Calls are independent: nothing
    orders, say, a ``create_order`` ahead of a later ``cancel_order``.

    Example:
        async with TradierClient(token, "prod") as client:
            quote = await client.get_quote("AAPL")
    """

    def __init__(
        self,
        access_token: Optional[str],
        endpoint: Union[str, Endpoint] = Endpoint.SANDBOX,
        transport: Optional[Transport] = None,
    ) -> None:
        self._builder = RequestBuilder(access_token, endpoint)
        self._access_token = access_token
        self._transport: Transport = transport or HttpxTransport()

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def endpoint(self) -> Endpoint:
        return self._builder.endpoint

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> TradierClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        params: Union[Params, str, None] = None,
        base_url: Optional[str] = None,
    ) -> httpx.Response:
        request = self._builder.build(method, path, params, base_url=base_url)
        return await self._transport.send(request)

    async def _request(
        self,
        method: str,
        path: str,
        params: Union[Params, str, None] = None,
        base_url: Optional[str] = None,
    ) -> Any:
        response = await self._send(method, path, params, base_url=base_url)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedShapeError(
                f"{method} {path} returned a non-JSON body", payload=response.text, keys=()
            ) from e

    async def get(self, path: str, params: Optional[Params] = None, base_url: Optional[str] = None) -> Any:
        return await self._request("GET", path, params, base_url=base_url)

    async def post(self, path: str, data: Union[Params, str, None] = None, base_url: Optional[str] = None) -> Any:
        return await self._request("POST", path, data, base_url=base_url)

    async def put(self, path: str, data: Union[Params, str, None] = None, base_url: Optional[str] = None) -> Any:
        return await self._request("PUT", path, data, base_url=base_url)

    async def delete(self, path: str, base_url: Optional[str] = None) -> Any:
        return await self._request("DELETE", path, base_url=base_url)

    # ------------------------------------------------------------------
    # User data
    # ------------------------------------------------------------------

    async def get_profile(self) -> Any:
        return unwrap_resource("profile", await self.get("user/profile"))

    async def get_balances(self) -> Any:
        return unwrap_resource("user", await self.get("user/balances"))

    async def get_positions(self) -> Any:
        return unwrap_resource("user", await self.get("user/positions"))

    async def get_history(self) -> Any:
        return unwrap_resource("user", await self.get("user/history"))

    async def get_gainloss(self) -> Any:
        return unwrap_resource("user", await self.get("user/gainloss"))

    async def get_orders(self) -> Any:
        return unwrap_resource("user", await self.get("user/orders"))

    # ------------------------------------------------------------------
    # Account data
    # ------------------------------------------------------------------

    async def get_account_balances(self, account: str) -> Any:
        return unwrap_resource("balances", await self.get(f"accounts/{account}/balances"))

    async def get_account_positions(self, account: str) -> Any:
        return unwrap_resource("positions", await self.get(f"accounts/{account}/positions"))

    async def get_account_history(self, account: str) -> Any:
        return unwrap_resource("history", await self.get(f"accounts/{account}/history"))

    async def get_account_gainloss(self, account: str) -> Any:
        return unwrap_resource("gainloss", await self.get(f"accounts/{account}/gainloss"))

    async def get_account_orders(self, account: str) -> Any:
        return unwrap_resource("orders", await self.get(f"accounts/{account}/orders"))

    async def get_account_order(self, account: str, order: str) -> Any:
        return unwrap_resource("order", await self.get(f"accounts/{account}/orders/{order}"))

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    async def create_order(self, account: str, data: OrderData) -> OrderAck:
        """Place an order. ``data`` is the order form, as a mapping or encoded string."""
        payload = await self.post(f"accounts/{account}/orders", data)
        return unwrap_model(OrderAck, "order", payload)

    async def preview_order(self, account: str, data: OrderData) -> Any:
        """Validate an order and return cost estimates without placing it.

        ``preview=true`` is always sent, even if ``data`` carries its own
        ``preview`` value.
        """
        body = {**clean_params(data), "preview": True}
        return unwrap_resource("order", await self.post(f"accounts/{account}/orders", body))

    async def change_order(self, account: str, order: str, data: OrderData) -> OrderAck:
        payload = await self.put(f"accounts/{account}/orders/{order}", data)
        return unwrap_model(OrderAck, "order", payload)

    async def cancel_order(self, account: str, order: str) -> OrderAck:
        payload = await self.delete(f"accounts/{account}/orders/{order}")
        return unwrap_model(OrderAck, "order", payload)

    # ------------------------------------------------------------------
    # Market data
    # ------------------------------------------------------------------

    async def get_quote(self, symbols: Symbols, greeks: Optional[bool] = None) -> Any:
        """Quotes for one symbol or many.

        Returns a single quote object for one symbol and a list for several.
        """
        params = {"symbols": parse_symbols(symbols), "greeks": greeks}
        return unwrap_resource("quotes", await self.get("markets/quotes", params))

    async def get_timesales(
        self,
        symbol: str,
        interval: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        session_filter: Optional[str] = None,
    ) -> Any:
        params = {
            "symbol": symbol,
            "interval": interval,
            "start": start,
            "end": end,
            "session_filter": session_filter,
        }
        return unwrap_resource("timesales", await self.get("markets/timesales", params))

    async def get_option_chains(
        self, symbol: str, expiration: Optional[str] = None, greeks: Optional[bool] = None
    ) -> Any:
        params = {"symbol": symbol, "expiration": expiration, "greeks": greeks}
        return unwrap_resource("option_chains", await self.get("markets/options/chains", params))

    async def get_option_strikes(self, symbol: str, expiration: Optional[str] = None) -> Any:
        params = {"symbol": symbol, "expiration": expiration}
        return unwrap_resource("option_strikes", await self.get("markets/options/strikes", params))

    async def get_option_expirations(
        self,
        symbol: str,
        include_all_roots: Optional[bool] = None,
        strikes: Optional[bool] = None,
    ) -> Any:
        params = {"symbol": symbol, "includeAllRoots": include_all_roots, "strikes": strikes}
        return unwrap_resource(
            "option_expirations", await self.get("markets/options/expirations", params)
        )

    async def get_price_history(
        self,
        symbol: str,
        interval: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> Any:
        params = {"symbol": symbol, "interval": interval, "start": start, "end": end}
        return unwrap_resource("price_history", await self.get("markets/history", params))

    async def get_clock(self) -> MarketClock:
        payload = await self.get("markets/clock")
        return unwrap_model(MarketClock, "clock", payload)

    async def get_calendar(self, market: Optional[str] = None, year: Optional[str] = None) -> Any:
        params = {"market": market, "year": year}
        return unwrap_resource("calendar", await self.get("markets/calendar", params))

    async def search(self, q: str, indexes: bool = True) -> Any:
        """Search securities by company name."""
        params = {"q": q, "indexes": indexes}
        return unwrap_resource("securities", await self.get("markets/search", params))

    async def lookup(
        self, q: str, exchanges: Optional[str] = None, types: Optional[str] = None
    ) -> Any:
        """Search securities by symbol prefix."""
        params = {"q": q, "exchanges": exchanges, "types": types}
        return unwrap_resource("securities", await self.get("markets/lookup", params))

    # ------------------------------------------------------------------
    # Fundamentals (beta endpoint only)
    # ------------------------------------------------------------------

    async def _fundamentals(self, resource: str, symbols: Symbols) -> Any:
        payload = await self.get(
            f"markets/fundamentals/{resource}",
            {"symbols": parse_symbols(symbols)},
            base_url=resolve(Endpoint.BETA),
        )
        return unwrap_resource("fundamentals", payload)

    async def get_company(self, symbols: Symbols) -> Any:
        return await self._fundamentals("company", symbols)

    async def get_calendars(self, symbols: Symbols) -> Any:
        return await self._fundamentals("calendars", symbols)

    async def get_dividends(self, symbols: Symbols) -> Any:
        return await self._fundamentals("dividends", symbols)

    async def get_corporate_actions(self, symbols: Symbols) -> Any:
        return await self._fundamentals("corporate_actions", symbols)

    async def get_ratios(self, symbols: Symbols) -> Any:
        return await self._fundamentals("ratios", symbols)

    async def get_financials(self, symbols: Symbols) -> Any:
        return await self._fundamentals("financials", symbols)

    async def get_statistics(self, symbols: Symbols) -> Any:
        return await self._fundamentals("statistics", symbols)

    # ------------------------------------------------------------------
    # Watchlists
    # ------------------------------------------------------------------

    async def get_watchlists(self) -> Any:
        return unwrap_resource("watchlists", await self.get("watchlists"))

    async def get_watchlist(self, watchlist_id: str) -> Any:
        return unwrap_resource("watchlist", await self.get(f"watchlists/{watchlist_id}"))

    async def create_watchlist(self, name: str, symbols: Optional[Symbols] = None) -> Any:
        data = {"name": name, "symbols": parse_symbols(symbols)}
        return unwrap_resource("watchlist", await self.post("watchlists", data))

    async def update_watchlist(
        self, watchlist_id: str, name: str, symbols: Optional[Symbols] = None
    ) -> Any:
        data = {"name": name, "symbols": parse_symbols(symbols)}
        return unwrap_resource("watchlist", await self.put(f"watchlists/{watchlist_id}", data))

    async def delete_watchlist(self, watchlist_id: str) -> Any:
        """Delete a watchlist; returns the remaining watchlists."""
        return unwrap_resource("watchlists", await self.delete(f"watchlists/{watchlist_id}"))

    async def add_symbols(self, watchlist_id: str, symbols: Symbols) -> Any:
        data = {"symbols": parse_symbols(symbols)}
        return unwrap_resource(
            "watchlist", await self.post(f"watchlists/{watchlist_id}/symbols", data)
        )

    async def remove_symbols(self, watchlist_id: str, symbol: str) -> Any:
        return unwrap_resource(
            "watchlist", await self.delete(f"watchlists/{watchlist_id}/symbols/{symbol}")
        )

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    async def create_session(self) -> StreamSession:
        """Open a streaming session; its id is valid for a few minutes."""
        payload = await self.post("markets/events/session")
        return unwrap_model(StreamSession, "session", payload)

    async def get_events(
        self,
        session_id: str,
        symbols: Symbols,
        event_filter: Optional[str] = None,
        linebreak: Optional[bool] = None,
    ) -> str:
        """Request streamed events for ``symbols``; returns the raw event text."""
        data = {
            "sessionid": session_id,
            "symbols": parse_symbols(symbols),
            "filter": event_filter,
            "linebreak": linebreak,
        }
        response = await self._send(
            "POST", "markets/events", data, base_url=resolve(Endpoint.STREAM)
        )
        return response.text


