"""Tests for the tradier CLI."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import pytest
from typer.testing import CliRunner

from tradier import __version__
from tradier.api.client import TradierClient
from tradier.api.transport import HttpxTransport
from tradier.cli import commands
from tradier.cli.commands import COMMANDS, check_arguments, get_command, list_commands
from tradier.cli.main import app
from tradier.models.config import TradierConfig

runner = CliRunner()


class _Recorder:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []
        self.configs: list[TradierConfig] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    def create_client(self, config: TradierConfig) -> TradierClient:
        self.configs.append(config)
        http = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return TradierClient(config.get_access_token(), config.endpoint, transport=HttpxTransport(http))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    """Route CLI calls to a mock transport."""
    rec = _Recorder()
    monkeypatch.setattr("tradier.cli.main.create_client", rec.create_client)
    monkeypatch.delenv("TRADIER_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("TRADIER_ENDPOINT", raising=False)
    return rec


class TestCommandTable:
    """Tests for the explicit command table."""

    def test_every_handler_is_callable(self) -> None:
        assert all(callable(handler) for handler in COMMANDS.values())

    def test_short_aliases(self) -> None:
        assert "quote" in COMMANDS
        assert "timesales" in COMMANDS

    def test_unknown_action(self) -> None:
        with pytest.raises(ValueError, match="Unknown action"):
            get_command("__init__")

    def test_private_methods_not_exposed(self) -> None:
        assert not any(name.startswith("_") for name in list_commands())

    def test_sorted(self) -> None:
        names = list_commands()
        assert names == sorted(names)

    def test_check_arguments_accepts_optional_params(self) -> None:
        check_arguments(get_command("get_timesales"), ["SPY"])
        check_arguments(get_command("get_timesales"), ["SPY", "1min", "2024-01-02", "2024-01-03", "open"])

    def test_check_arguments_too_few(self) -> None:
        with pytest.raises(ValueError, match="get_account_order"):
            check_arguments(get_command("get_account_order"), ["VA1"])

    def test_check_arguments_too_many(self) -> None:
        with pytest.raises(ValueError, match="Bad parameters"):
            check_arguments(get_command("get_clock"), ["extra"])


class TestCli:
    """Tests for CLI commands."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_actions(self, recorder: _Recorder) -> None:
        result = runner.invoke(app, ["actions"])
        assert result.exit_code == 0
        assert "get_profile" in result.stdout
        assert "create_session" in result.stdout

    def test_call_profile(self, recorder: _Recorder) -> None:
        recorder.payload = {"profile": {"id": "id-1", "name": "Jane"}}
        result = runner.invoke(app, ["--token", "cli-token", "--endpoint", "prod", "call", "get_profile"])

        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout) == {"id": "id-1", "name": "Jane"}
        request = recorder.requests[0]
        assert str(request.url) == "https://api.tradier.com/v1/user/profile"
        assert request.headers["authorization"] == "Bearer cli-token"

    def test_call_passes_params(self, recorder: _Recorder) -> None:
        recorder.payload = {"order": {"id": 1, "status": "ok"}}
        result = runner.invoke(
            app, ["--token", "t", "call", "cancel_order", "VA1", "1"]
        )
        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout)["id"] == 1
        assert recorder.requests[0].method == "DELETE"
        assert recorder.requests[0].url.path == "/v1/accounts/VA1/orders/1"

    def test_call_unknown_action(self, recorder: _Recorder) -> None:
        result = runner.invoke(app, ["--token", "t", "call", "do_magic"])
        assert result.exit_code == 1
        assert "Unknown action" in result.stdout
        assert recorder.requests == []

    def test_call_wrong_arity(self, recorder: _Recorder) -> None:
        result = runner.invoke(app, ["--token", "t", "call", "get_account_order", "VA1"])
        assert result.exit_code == 1
        assert "Bad parameters" in result.stdout
        assert recorder.requests == []

    def test_client_type_error_is_not_hidden(
        self, recorder: _Recorder, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(client: TradierClient) -> None:
            raise TypeError("unsupported operand")

        monkeypatch.setitem(commands._COMMANDS, "broken", broken)
        result = runner.invoke(app, ["--token", "t", "call", "broken"])
        assert result.exit_code == 1
        assert isinstance(result.exception, TypeError)

    def test_quote_splits_symbols(self, recorder: _Recorder) -> None:
        recorder.payload = {"quotes": {"quote": [{"symbol": "AAPL"}, {"symbol": "MSFT"}]}}
        result = runner.invoke(app, ["--token", "t", "quote", "AAPL,MSFT"])
        assert result.exit_code == 0, result.stdout
        assert recorder.requests[0].url.params["symbols"] == "AAPL,MSFT"
        assert len(json.loads(result.stdout)) == 2

    def test_timesales_prints_record_count(self, recorder: _Recorder) -> None:
        recorder.payload = {"series": {"data": [{"price": 1}, {"price": 2}, {"price": 3}]}}
        result = runner.invoke(app, ["--token", "t", "timesales", "SPY", "1min"])
        assert result.exit_code == 0, result.stdout
        assert "Records: 3" in result.stdout
        assert recorder.requests[0].url.params["interval"] == "1min"

    def test_api_error_exits_nonzero(self, recorder: _Recorder) -> None:
        recorder.status_code = 401
        recorder.text = "Invalid Access Token"
        result = runner.invoke(app, ["--token", "bad", "call", "get_profile"])
        assert result.exit_code == 1
        assert "401" in result.stdout
        assert "Invalid Access Token" in result.stdout

    def test_invalid_endpoint(self, recorder: _Recorder) -> None:
        result = runner.invoke(app, ["--endpoint", "staging", "actions"])
        assert result.exit_code == 1
        assert "Error loading configuration" in result.stdout

    def test_token_file_option(self, recorder: _Recorder, tmp_path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text("file-token\n")
        recorder.payload = {"clock": {"date": "2024-01-02", "description": "open", "state": "open", "timestamp": 1}}
        result = runner.invoke(app, ["--token-file", str(token_file), "call", "get_clock"])
        assert result.exit_code == 0, result.stdout
        assert recorder.requests[0].headers["authorization"] == "Bearer file-token"
        assert json.loads(result.stdout)["state"] == "open"
