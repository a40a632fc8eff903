"""Dependency injection providers for FastAPI route handlers.

Shared objects (config, analysis service, dashboard controller) are created
once by the app factory and stored on ``app.state``. Route handlers declare
them via ``Depends()``; tests swap them with ``dependency_overrides``.
"""

import logging
import re
from typing import Annotated

from fastapi import HTTPException, Path, Request

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import AppConfig
from Alpha_Insight.web.dashboard import DashboardController

logger = logging.getLogger(__name__)

# 1-10 uppercase alphanumerics, dots or dashes (BRK.B, BTC-USD)
_TICKER_PATTERN = re.compile(r"^[A-Z0-9.\-]{1,10}$")


def normalize_ticker(symbol: str) -> str | None:
    """Return the uppercase form of *symbol*, or ``None`` if it is not a ticker."""
    normalized = symbol.strip().upper()
    if not _TICKER_PATTERN.match(normalized):
        return None
    return normalized


async def get_config(request: Request) -> AppConfig:
    """Return the start-up configuration."""
    config: AppConfig = request.app.state.config
    return config


async def get_analysis_service(request: Request) -> AnalysisService:
    """Return the app-wide AnalysisService."""
    service: AnalysisService = request.app.state.analysis_service
    return service


async def get_dashboard_controller(request: Request) -> DashboardController:
    """Return the app-wide DashboardController holding the view state."""
    controller: DashboardController = request.app.state.dashboard
    return controller


async def validate_ticker_symbol(
    symbol: Annotated[str, Path(description="Ticker symbol (1-10 characters)")],
) -> str:
    """Validate and normalize a ticker symbol path parameter.

    Raises HTTP 422 if the symbol is invalid.

    Returns:
        The validated uppercase ticker symbol.
    """
    normalized = normalize_ticker(symbol)
    if normalized is None:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid ticker symbol: '{symbol}'. Must be 1-10 letters, digits, '.' or '-'.",
        )
    return normalized
