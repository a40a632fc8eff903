"""Synthetic market data API routes.

GET /api/market/{symbol}/series : daily price history.
GET /api/market/{symbol}/quote  : fresh quote snapshot.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from Alpha_Insight.config import AppConfig
from Alpha_Insight.models.market_data import PricePoint, Quote
from Alpha_Insight.services.synthetic_data import generate_series, get_quote
from Alpha_Insight.web.deps import get_config, validate_ticker_symbol

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/market", tags=["market"])

MAX_DAYS: int = 365


@router.get("/{symbol}/series", response_model=list[PricePoint])
async def get_series(
    symbol: Annotated[str, Depends(validate_ticker_symbol)],
    config: Annotated[AppConfig, Depends(get_config)],
    days: Annotated[int | None, Query(ge=0, le=MAX_DAYS)] = None,
) -> list[PricePoint]:
    """Return ``days + 1`` synthetic daily price points ending today."""
    return generate_series(symbol, config.history_days if days is None else days)


@router.get("/{symbol}/quote", response_model=Quote)
async def get_symbol_quote(
    symbol: Annotated[str, Depends(validate_ticker_symbol)],
) -> Quote:
    """Return a freshly drawn quote for the symbol."""
    return get_quote(symbol)
