"""Rich-based terminal output for price series, quotes, and AI analyses.

Uses ``rich.console.Console`` for all output. Color scheme:
green = bullish/up, red = bearish/down, yellow = neutral.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.enums import Stance
from Alpha_Insight.models.market_data import PricePoint, Quote

logger = logging.getLogger(__name__)

# Shared console instance for terminal output
console = Console()

# --- Color scheme ---
COLOR_BULLISH: str = "green"
COLOR_BEARISH: str = "red"
COLOR_NEUTRAL: str = "yellow"
COLOR_HEADER: str = "bold cyan"
COLOR_MUTED: str = "dim"


def _stance_color(stance: Stance) -> str:
    """Map a stance to its terminal color."""
    if stance == Stance.BULLISH:
        return COLOR_BULLISH
    if stance == Stance.BEARISH:
        return COLOR_BEARISH
    return COLOR_NEUTRAL


def render_series(symbol: str, series: Sequence[PricePoint], *, out: Console | None = None) -> None:
    """Print the price history as a table, oldest first."""
    target = out or console
    table = Table(title=f"{symbol} synthetic price history", header_style=COLOR_HEADER)
    table.add_column("Date")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("Close", justify="right")
    table.add_column("Volume", justify="right")

    previous: PricePoint | None = None
    for point in series:
        color = COLOR_BULLISH if previous is None or point.price >= previous.price else COLOR_BEARISH
        table.add_row(
            point.date.isoformat(),
            f"{point.open:.2f}",
            f"{point.high:.2f}",
            f"{point.low:.2f}",
            f"[{color}]{point.price:.2f}[/{color}]",
            f"{point.volume:,}",
        )
        previous = point
    target.print(table)


def render_quote(quote: Quote, *, out: Console | None = None) -> None:
    """Print a one-panel quote card."""
    target = out or console
    color = COLOR_BULLISH if quote.is_up else COLOR_BEARISH
    body = (
        f"[bold]${quote.price:,.2f}[/bold]  "
        f"[{color}]{quote.change:+.2f} ({quote.change_percent:+.2f}%)[/{color}]\n"
        f"[{COLOR_MUTED}]Updated {quote.last_updated.strftime('%Y-%m-%d %H:%M:%S %Z')}[/{COLOR_MUTED}]"
    )
    target.print(Panel(body, title=f"{quote.symbol} | {quote.display_name}", style=COLOR_HEADER))


def render_analysis(result: AnalysisResult, *, out: Console | None = None) -> None:
    """Print the full AI analysis: header, summary, factors, technicals, sources."""
    target = out or console
    color = _stance_color(result.stance)

    target.print()
    target.print(
        Panel(
            f"[{color}][bold]{result.stance}[/bold][/{color}]  "
            f"confidence {result.confidence}%  "
            f"target ${result.target_price:,.2f} ({escape(result.timeframe)})",
            title=f"{result.symbol} AI Analysis",
            style=COLOR_HEADER,
        )
    )

    target.print("\n[bold]Summary[/bold]")
    target.print(result.summary, markup=False)

    if result.key_factors:
        target.print("\n[bold]Key Factors[/bold]")
        for factor in result.key_factors:
            target.print(f"  - {factor}", markup=False)

    target.print("\n[bold]Technical Analysis[/bold]")
    target.print(result.technical_analysis, markup=False)

    if result.sources:
        target.print("\n[bold]Sources[/bold]")
        for index, source in enumerate(result.sources, start=1):
            target.print(
                f"  {index}. {escape(source.title)} "
                f"[{COLOR_MUTED}]{escape(source.url)}[/{COLOR_MUTED}]"
            )

    target.print(
        f"\n[{COLOR_MUTED}]Model: {result.model_used} | "
        f"Generated {result.generated_at.strftime('%Y-%m-%dT%H:%M:%SZ')}[/{COLOR_MUTED}]"
    )
