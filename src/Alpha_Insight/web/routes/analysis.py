"""AI analysis API route.

POST /api/analysis/{symbol}: request a grounded analysis (blocking).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import AppConfig
from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.market_data import PricePoint
from Alpha_Insight.services.synthetic_data import generate_series
from Alpha_Insight.web.deps import get_analysis_service, get_config, validate_ticker_symbol
from Alpha_Insight.web.routes.market import MAX_DAYS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


class AnalysisRequest(BaseModel):
    """Optional request body: a caller-supplied series or a day count."""

    model_config = ConfigDict(frozen=True)

    days: int | None = Field(default=None, ge=0, le=MAX_DAYS)
    series: list[PricePoint] | None = None


@router.post("/{symbol}", response_model=AnalysisResult)
async def request_analysis(
    symbol: Annotated[str, Depends(validate_ticker_symbol)],
    service: Annotated[AnalysisService, Depends(get_analysis_service)],
    config: Annotated[AppConfig, Depends(get_config)],
    body: Annotated[AnalysisRequest | None, Body()] = None,
) -> AnalysisResult:
    """Analyze *symbol* using the supplied series or a freshly generated one.

    ``AnalysisError`` propagates to the exception handler (HTTP 502).
    """
    request = body or AnalysisRequest()
    if request.series is not None:
        series = request.series
    else:
        days = config.history_days if request.days is None else request.days
        series = generate_series(symbol, days)

    logger.info("Analysis requested via API for %s (%d points)", symbol, len(series))
    return await service.request_analysis(symbol, series)
