"""Analysis models: provider payload, citations, and the final result.

AnalysisPayload mirrors the JSON the model is forced to emit (camelCase
keys, ``prediction`` for the stance). It is validated strictly before the
service turns it into an AnalysisResult, which is what the rest of the
application consumes.
"""

import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from Alpha_Insight.models.enums import Stance

# --- Validation boundaries ---
CONFIDENCE_MIN: float = 0.0
CONFIDENCE_MAX: float = 100.0
MAX_SOURCES: int = 5

DEFAULT_CITATION_TITLE: str = "Market Source"
DEFAULT_CITATION_URL: str = "#"
DEFAULT_TIMEFRAME: str = "30 days"

_CENT = Decimal("0.01")


class Citation(BaseModel):
    """A web source the provider grounded its answer on."""

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_CITATION_TITLE
    url: str = DEFAULT_CITATION_URL


class AnalysisPayload(BaseModel):
    """Structured JSON returned by the analysis model, before enrichment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str
    stance: Stance = Field(alias="prediction")
    confidence: float = Field(ge=CONFIDENCE_MIN, le=CONFIDENCE_MAX, strict=True)
    target_price: Decimal = Field(alias="targetPrice", gt=0)
    timeframe: str = DEFAULT_TIMEFRAME
    key_factors: list[str] = Field(alias="keyFactors")
    technical_analysis: str = Field(alias="technicalAnalysis")

    @field_validator("target_price")
    @classmethod
    def round_target_price(cls, value: Decimal) -> Decimal:
        """Target prices are quoted in cents and must stay positive once rounded."""
        try:
            rounded = value.quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            msg = f"target price {value} is out of range"
            raise ValueError(msg) from exc
        if rounded <= 0:
            msg = f"target price {value} rounds to zero"
            raise ValueError(msg)
        return rounded


class AnalysisResult(BaseModel):
    """Validated, display-ready market analysis for one symbol.

    Produced once per request and replaced wholesale by the next one.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    summary: str
    stance: Stance
    confidence: int = Field(ge=0, le=100)
    target_price: Decimal = Field(gt=0)
    timeframe: str
    key_factors: list[str]
    technical_analysis: str
    sources: list[Citation] = Field(default_factory=list, max_length=MAX_SOURCES)
    model_used: str
    generated_at: datetime.datetime

    @field_serializer("target_price")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal fields as strings to preserve precision."""
        return str(value)

    @classmethod
    def from_payload(
        cls,
        payload: AnalysisPayload,
        *,
        symbol: str,
        sources: list[Citation],
        model_used: str,
        generated_at: datetime.datetime,
    ) -> "AnalysisResult":
        """Combine a validated provider payload with request metadata."""
        confidence = int(Decimal(str(payload.confidence)).quantize(Decimal(1), ROUND_HALF_UP))
        return cls(
            symbol=symbol,
            summary=payload.summary,
            stance=payload.stance,
            confidence=confidence,
            target_price=payload.target_price,
            timeframe=payload.timeframe,
            key_factors=list(payload.key_factors),
            technical_analysis=payload.technical_analysis,
            sources=sources[:MAX_SOURCES],
            model_used=model_used,
            generated_at=generated_at,
        )
