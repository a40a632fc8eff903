"""Analysis request service: symbol + price history -> AnalysisResult.

One request per call, no retries. Every failure collapses into an
``AnalysisError`` carrying the same user-facing message; the underlying
cause is logged here and nowhere else.
"""

from __future__ import annotations

import datetime
import json
import logging
from collections.abc import Sequence

import pydantic

from Alpha_Insight.agents._parsing import ANALYSIS_RESPONSE_SCHEMA, parse_analysis_payload
from Alpha_Insight.agents.gemini_client import GeminiClient
from Alpha_Insight.agents.prompts import build_analysis_prompt
from Alpha_Insight.config import AppConfig
from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.market_data import PricePoint
from Alpha_Insight.utils.exceptions import (
    REASON_MISSING_CREDENTIALS,
    AnalysisError,
    AnalysisParseError,
)

logger = logging.getLogger(__name__)


class AnalysisService:
    """Requests and validates AI market analyses.

    Parameters
    ----------
    client:
        Gemini client, or ``None`` when no API key is configured. A service
        without a client fails every request with ``AnalysisError``.
    """

    def __init__(self, client: GeminiClient | None) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: AppConfig) -> AnalysisService:
        """Build a service from the start-up configuration."""
        if not config.analysis_configured or config.api_key is None:
            return cls(client=None)
        client = GeminiClient(
            api_key=config.api_key.get_secret_value(),
            model=config.model,
            thinking_budget=config.thinking_budget,
        )
        return cls(client=client)

    @property
    def configured(self) -> bool:
        """True when requests can reach the provider."""
        return self._client is not None

    async def request_analysis(
        self,
        symbol: str,
        series: Sequence[PricePoint],
    ) -> AnalysisResult:
        """Request a grounded market analysis for *symbol*.

        Parameters
        ----------
        symbol:
            Uppercase ticker symbol.
        series:
            Chronological price history used as prompt context.

        Returns
        -------
        AnalysisResult
            Validated analysis with at most five citations.

        Raises
        ------
        AnalysisParseError
            If the provider text is not valid JSON or violates the schema.
        AnalysisError
            On any transport or provider failure, or missing credentials.
        """
        if self._client is None:
            logger.error("Analysis requested for %s but no API key is configured", symbol)
            raise AnalysisError(symbol=symbol, reason=REASON_MISSING_CREDENTIALS)

        prompt = build_analysis_prompt(symbol, series)
        logger.debug("Requesting analysis for %s (%d price points)", symbol, len(series))

        try:
            response = await self._client.generate_json(
                prompt,
                response_schema=ANALYSIS_RESPONSE_SCHEMA,
            )
        except Exception:
            logger.exception("Gemini analysis request failed for %s", symbol)
            raise AnalysisError(symbol=symbol) from None

        try:
            payload = parse_analysis_payload(response.text)
            result = AnalysisResult.from_payload(
                payload,
                symbol=symbol,
                sources=response.citations,
                model_used=response.model,
                generated_at=datetime.datetime.now(datetime.UTC),
            )
        except (json.JSONDecodeError, pydantic.ValidationError) as exc:
            logger.warning("Unusable analysis payload for %s: %s", symbol, exc)
            raise AnalysisParseError(symbol=symbol) from None

        logger.info(
            "Analysis for %s: stance=%s confidence=%d sources=%d",
            symbol,
            result.stance,
            result.confidence,
            len(result.sources),
        )
        return result
