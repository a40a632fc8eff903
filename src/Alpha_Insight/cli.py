"""CLI entry point for Alpha Insight.

Provides the ``alpha-insight`` command with subcommands for serving the
dashboard, printing synthetic market data, and requesting an AI analysis.

This is the ONLY module that writes to the console directly. All other
modules use ``logging``. Async internals are bridged to typer's synchronous
interface via ``asyncio.run()``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
import uvicorn
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import AppConfig
from Alpha_Insight.logging_config import configure_logging
from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.market_data import PricePoint
from Alpha_Insight.reporting.terminal import render_analysis, render_quote, render_series
from Alpha_Insight.services.synthetic_data import DEFAULT_DAYS, generate_series, get_quote
from Alpha_Insight.utils.exceptions import AnalysisError, ConfigError

logger = logging.getLogger(__name__)

app = typer.Typer(name="alpha-insight", help="Synthetic market dashboard with AI analysis")

# Rich console for formatted output
console = Console()

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000

VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress info logging")]
DaysOption = Annotated[int, typer.Option(min=0, help="Days of history before today")]


def _load_config() -> AppConfig:
    """Read the environment, exiting with a readable message on bad values."""
    try:
        return AppConfig.from_env()
    except ConfigError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        raise typer.Exit(code=2) from exc


# ---------------------------------------------------------------------------
# serve command
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Interface to bind")] = DEFAULT_HOST,
    port: Annotated[int, typer.Option(help="Port to listen on")] = DEFAULT_PORT,
    reload: Annotated[bool, typer.Option(help="Reload on code changes")] = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Run the web dashboard."""
    configure_logging(verbose=verbose, quiet=quiet)
    _load_config()
    console.print(f"[bold]Alpha Insight[/bold] listening on http://{host}:{port}")
    uvicorn.run(
        "Alpha_Insight.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


# ---------------------------------------------------------------------------
# series / quote commands
# ---------------------------------------------------------------------------


@app.command()
def series(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol")],
    days: DaysOption = DEFAULT_DAYS,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Print a synthetic daily price history."""
    configure_logging(verbose=verbose, quiet=quiet)
    ticker = symbol.strip().upper()
    render_series(ticker, generate_series(ticker, days), out=console)


@app.command()
def quote(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol")],
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Print a synthetic quote snapshot."""
    configure_logging(verbose=verbose, quiet=quiet)
    render_quote(get_quote(symbol), out=console)


# ---------------------------------------------------------------------------
# analyze command
# ---------------------------------------------------------------------------


@app.command()
def analyze(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol")],
    days: DaysOption = DEFAULT_DAYS,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Generate price history for SYMBOL and request an AI analysis of it."""
    configure_logging(verbose=verbose, quiet=quiet)
    config = _load_config()
    ticker = symbol.strip().upper()
    history = generate_series(ticker, days)
    service = AnalysisService.from_config(config)

    try:
        result = asyncio.run(_analyze_async(service, ticker, history))
    except AnalysisError as exc:
        console.print(f"[red]{exc.user_message}[/red]")
        raise typer.Exit(code=1) from exc

    render_analysis(result, out=console)


async def _analyze_async(
    service: AnalysisService,
    ticker: str,
    history: list[PricePoint],
) -> AnalysisResult:
    """Run the analysis request behind a spinner."""
    with Progress(
        SpinnerColumn(spinner_name="line"),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Analyzing {ticker}...", total=None)
        result = await service.request_analysis(ticker, history)
        progress.update(task, completed=1)
    return result


if __name__ == "__main__":
    app()
