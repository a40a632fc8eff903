"""Shared test fixtures for the Alpha Insight test suite.

Provides realistic sample instances of the core models and fake provider
responses so tests don't need to inline large construction blocks.
"""

import datetime
import json
import random
from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace

import pytest

from Alpha_Insight.models import AnalysisResult, Citation, PricePoint, Quote, Stance

FIXED_TODAY = datetime.date(2025, 1, 15)
FIXED_NOW = datetime.datetime(2025, 1, 15, 15, 30, 0, tzinfo=datetime.UTC)


@pytest.fixture()
def seeded_rng() -> random.Random:
    """Deterministic random source for generator tests."""
    return random.Random(42)


@pytest.fixture()
def sample_price_point() -> PricePoint:
    """A valid price point with realistic AAPL daily data."""
    return PricePoint(
        date=datetime.date(2025, 1, 15),
        price=Decimal("186.75"),
        open=Decimal("185.50"),
        high=Decimal("187.25"),
        low=Decimal("184.10"),
        volume=5_234_000,
    )


@pytest.fixture()
def sample_series() -> list[PricePoint]:
    """Twelve consecutive days of AAPL-like prices, oldest first."""
    points: list[PricePoint] = []
    for i in range(12):
        close = Decimal("185.00") + Decimal(i)
        points.append(
            PricePoint(
                date=datetime.date(2025, 1, 4) + datetime.timedelta(days=i),
                price=close,
                open=close - Decimal("0.50"),
                high=close + Decimal("1.00"),
                low=close - Decimal("1.00"),
                volume=2_000_000 + i * 1000,
            )
        )
    return points


@pytest.fixture()
def sample_quote() -> Quote:
    """A valid quote snapshot for AAPL."""
    return Quote(
        symbol="AAPL",
        display_name="AAPL Inc.",
        price=Decimal("186.52"),
        change=Decimal("1.25"),
        change_percent=Decimal("0.67"),
        last_updated=FIXED_NOW,
    )


@pytest.fixture()
def sample_payload_dict() -> dict[str, object]:
    """Provider JSON body matching the structured-output schema."""
    return {
        "summary": "Momentum remains constructive ahead of earnings.",
        "prediction": "BULLISH",
        "confidence": 72,
        "targetPrice": 198.4,
        "timeframe": "30 days",
        "keyFactors": ["Services revenue growth", "Buyback support"],
        "technicalAnalysis": "Price holds above the 20-day average with rising volume.",
    }


@pytest.fixture()
def sample_analysis_result() -> AnalysisResult:
    """A valid analysis result with two sources."""
    return AnalysisResult(
        symbol="AAPL",
        summary="Momentum remains constructive ahead of earnings.",
        stance=Stance.BULLISH,
        confidence=72,
        target_price=Decimal("198.40"),
        timeframe="30 days",
        key_factors=["Services revenue growth", "Buyback support"],
        technical_analysis="Price holds above the 20-day average with rising volume.",
        sources=[
            Citation(title="Reuters", url="https://www.reuters.com/markets/aapl"),
            Citation(title="Market Source", url="#"),
        ],
        model_used="gemini-3-pro-preview",
        generated_at=FIXED_NOW,
    )


def _make_genai_response(
    text: str | None,
    chunks: list[tuple[str | None, str | None]] | None = None,
    *,
    prompt_tokens: int = 800,
    output_tokens: int = 300,
) -> SimpleNamespace:
    """Build an object shaped like ``google.genai.types.GenerateContentResponse``.

    *chunks* is a list of ``(title, uri)`` pairs for grounding metadata;
    ``None`` omits grounding metadata entirely.
    """
    grounding = None
    if chunks is not None:
        grounding = SimpleNamespace(
            grounding_chunks=[
                SimpleNamespace(web=SimpleNamespace(title=title, uri=uri)) for title, uri in chunks
            ]
        )
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(grounding_metadata=grounding)],
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=output_tokens,
        ),
        model_version="gemini-3-pro-preview",
    )


@pytest.fixture()
def make_genai_response() -> Callable[..., SimpleNamespace]:
    """Factory for fake provider responses (see ``_make_genai_response``)."""
    return _make_genai_response


@pytest.fixture()
def valid_response_text(sample_payload_dict: dict[str, object]) -> str:
    """Serialized provider payload."""
    return json.dumps(sample_payload_dict)
