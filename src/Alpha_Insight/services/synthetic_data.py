"""Synthetic market data: random-walk price history and quote snapshots.

Nothing here touches the network. Both entry points are pure functions of
their arguments plus a ``random.Random`` source, so tests pass a seeded
generator and a fixed clock to get reproducible output.

The quote is drawn independently of the series, so a quote card and a
chart for the same symbol are not expected to agree.
"""

from __future__ import annotations

import datetime
import logging
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from Alpha_Insight.models.market_data import PricePoint, Quote

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_DAYS: Final[int] = 30

BASE_PRICES: Final[dict[str, float]] = {
    "AAPL": 190.0,
    "TSLA": 170.0,
}
DEFAULT_BASE_PRICE: Final[float] = 150.0

# Daily move scale as a fraction of the current price
VOLATILITY: Final[float] = 0.02
# Subtracted from a uniform [0, 1) draw; below 0.5 so up-moves are slightly favoured
DRIFT_CENTER: Final[float] = 0.48

VOLUME_MIN: Final[int] = 1_000_000
VOLUME_SPAN: Final[int] = 10_000_000

QUOTE_PRICE_MIN: Final[float] = 50.0
QUOTE_PRICE_SPAN: Final[float] = 200.0
QUOTE_CHANGE_SPAN: Final[float] = 10.0

MIN_PRICE: Final[Decimal] = Decimal("0.01")
_CENT: Final[Decimal] = Decimal("0.01")


def _round_cents(value: Decimal) -> Decimal:
    """Quantize to cents half-up, folding -0.00 into 0.00."""
    rounded = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    return rounded.copy_abs() if rounded.is_zero() else rounded


def _to_cents(value: float) -> Decimal:
    """Round a float to a cent-precision Decimal."""
    return _round_cents(Decimal(str(value)))


def _to_price(value: float) -> Decimal:
    """Round to cents and clamp to the smallest positive price."""
    return max(_to_cents(value), MIN_PRICE)


def base_price_for(symbol: str) -> float:
    """Return the random-walk starting price for *symbol*."""
    return BASE_PRICES.get(symbol.strip().upper(), DEFAULT_BASE_PRICE)


def generate_series(
    symbol: str,
    days: int = DEFAULT_DAYS,
    *,
    rng: random.Random | None = None,
    today: datetime.date | None = None,
) -> list[PricePoint]:
    """Generate ``days + 1`` daily price points ending on *today*.

    Each day opens at the previous close and moves by
    ``(u - DRIFT_CENTER) * VOLATILITY * open`` with ``u`` uniform in [0, 1).
    The high/low band is an independent random excursion around the open,
    widened when needed so that it always contains the close.

    Args:
        symbol: Ticker symbol; only used to pick the base price.
        days: Number of days before *today* to start from.
        rng: Random source (defaults to the module-level generator).
        today: Last date of the series (defaults to ``date.today()``).

    Returns:
        Price points in strictly ascending date order.

    Raises:
        ValueError: If *days* is negative.
    """
    if days < 0:
        msg = f"days must be >= 0, got {days}"
        raise ValueError(msg)

    rand = rng or random.Random()
    end = today or datetime.date.today()
    current = base_price_for(symbol)

    points: list[PricePoint] = []
    for offset in range(days, -1, -1):
        volatility = current * VOLATILITY
        open_ = current
        close = open_ + (rand.random() - DRIFT_CENTER) * volatility
        high = max(open_ + rand.random() * volatility, close)
        low = min(open_ - rand.random() * volatility, close)
        current = close

        points.append(
            PricePoint(
                date=end - datetime.timedelta(days=offset),
                price=_to_price(close),
                open=_to_price(open_),
                high=_to_price(high),
                low=_to_price(low),
                volume=rand.randrange(VOLUME_MIN, VOLUME_MIN + VOLUME_SPAN),
            )
        )

    logger.debug("Generated %d synthetic price points for %s", len(points), symbol)
    return points


def get_quote(
    symbol: str,
    *,
    rng: random.Random | None = None,
    now: datetime.datetime | None = None,
) -> Quote:
    """Draw a fresh random quote snapshot for *symbol*.

    ``change_percent`` is derived from the rounded ``change`` and ``price``
    so the three displayed numbers are always mutually consistent.
    """
    rand = rng or random.Random()
    normalized = symbol.strip().upper()

    price = _to_price(rand.random() * QUOTE_PRICE_SPAN + QUOTE_PRICE_MIN)
    change = _to_cents((rand.random() - 0.5) * QUOTE_CHANGE_SPAN)
    change_percent = _round_cents(change / price * 100)

    return Quote(
        symbol=normalized,
        display_name=f"{normalized} Inc.",
        price=price,
        change=change,
        change_percent=change_percent,
        last_updated=now or datetime.datetime.now(datetime.UTC),
    )
