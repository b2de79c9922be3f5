"""Tradier CLI - Entry point for the tradier command."""

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from tradier import __version__
from tradier.api.factory import create_client
from tradier.api.models import TradierError
from tradier.cli.commands import Handler, check_arguments, get_command, list_commands
from tradier.cli.output import print_error, print_record_count, print_result
from tradier.core.config import load_app_config
from tradier.models.config import TradierConfig

app = typer.Typer(
    name="tradier",
    help="Tradier - command-line access to the Tradier brokerage API",
    add_completion=False,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    """Set up console logging for the CLI."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(message)s", datefmt="%H:%M:%S"))
        root_logger.addHandler(handler)

    # Reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold green]tradier[/bold green] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Access token (overrides TRADIER_ACCESS_TOKEN)"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Endpoint: prod, beta, sandbox or stream"),
    token_file: Optional[Path] = typer.Option(None, "--token-file", help="File holding the access token"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file with a [tradier] table"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each request"),
    version: bool = typer.Option(  # noqa: ARG001
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Tradier - command-line access to the Tradier brokerage API."""
    _setup_logging(verbose)
    try:
        ctx.obj = load_app_config(
            config, access_token=token, endpoint=endpoint, token_file=token_file
        )
    except Exception as e:
        console.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


async def _invoke(config: TradierConfig, handler: Handler, params: List[str]) -> Any:
    async with create_client(config) as client:
        return await handler(client, *params)


def _run(ctx: typer.Context, handler: Handler, params: List[str]) -> Any:
    """Run one client call, printing API errors and exiting non-zero on failure."""
    try:
        check_arguments(handler, params)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    try:
        return asyncio.run(_invoke(ctx.obj, handler, params))
    except TradierError as e:
        print_error(e, console)
        raise typer.Exit(1) from e


@app.command()
def call(
    ctx: typer.Context,
    action: str = typer.Argument(..., help="Action name (see 'tradier actions')"),
    params: Optional[List[str]] = typer.Argument(None, help="Positional parameters for the action"),
) -> None:
    """Call any API action by name."""
    try:
        handler = get_command(action)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    print_result(_run(ctx, handler, params or []), console)


@app.command()
def quote(
    ctx: typer.Context,
    symbols: str = typer.Argument(..., help="Comma-separated symbols"),
) -> None:
    """Show quotes for one or more symbols."""
    print_result(_run(ctx, get_command("quote"), [symbols]), console)


@app.command()
def timesales(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Symbol"),
    params: Optional[List[str]] = typer.Argument(None, help="INTERVAL START END SESSION_FILTER"),
) -> None:
    """Show time and sales for a symbol and the number of records."""
    series = _run(ctx, get_command("timesales"), [symbol, *(params or [])])
    print_result(series, console)
    print_record_count(series, console)


@app.command()
def actions() -> None:
    """List the actions accepted by 'tradier call'."""
    for name in list_commands():
        console.print(name)


if __name__ == "__main__":
    app()
