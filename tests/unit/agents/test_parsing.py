"""Tests for structured-output parsing and citation extraction.

Verifies markdown fence stripping, schema enforcement on the parsed JSON,
and defensive reading of grounding metadata.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from types import SimpleNamespace

import pydantic
import pytest
from google.genai import types

from Alpha_Insight.agents._parsing import (
    ANALYSIS_RESPONSE_SCHEMA,
    extract_citations,
    parse_analysis_payload,
)
from Alpha_Insight.models.enums import Stance

# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------


class TestResponseSchema:
    """Tests for the structured-output schema sent with each request."""

    def test_prediction_enum(self) -> None:
        assert ANALYSIS_RESPONSE_SCHEMA.properties is not None
        prediction = ANALYSIS_RESPONSE_SCHEMA.properties["prediction"]
        assert prediction.enum == ["BULLISH", "BEARISH", "NEUTRAL"]

    def test_required_fields(self) -> None:
        assert ANALYSIS_RESPONSE_SCHEMA.required == [
            "summary",
            "prediction",
            "confidence",
            "targetPrice",
            "keyFactors",
            "technicalAnalysis",
        ]

    def test_timeframe_is_optional(self) -> None:
        assert ANALYSIS_RESPONSE_SCHEMA.properties is not None
        assert "timeframe" in ANALYSIS_RESPONSE_SCHEMA.properties
        assert "timeframe" not in (ANALYSIS_RESPONSE_SCHEMA.required or [])

    def test_root_is_object(self) -> None:
        assert ANALYSIS_RESPONSE_SCHEMA.type == types.Type.OBJECT


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


class TestParseAnalysisPayload:
    """Tests for parse_analysis_payload()."""

    def test_plain_json(self, valid_response_text: str) -> None:
        payload = parse_analysis_payload(valid_response_text)
        assert payload.stance == Stance.BULLISH
        assert payload.confidence == 72

    def test_fenced_json(self, valid_response_text: str) -> None:
        payload = parse_analysis_payload(f"```json\n{valid_response_text}\n```")
        assert payload.summary.startswith("Momentum")

    def test_fence_without_language(self, valid_response_text: str) -> None:
        payload = parse_analysis_payload(f"```\n{valid_response_text}\n```")
        assert payload.stance == Stance.BULLISH

    def test_surrounding_whitespace(self, valid_response_text: str) -> None:
        payload = parse_analysis_payload(f"\n\n  {valid_response_text}  \n")
        assert payload.stance == Stance.BULLISH

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            parse_analysis_payload("The outlook is bullish.")

    def test_empty_text_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            parse_analysis_payload("")

    def test_unknown_prediction_raises(self, sample_payload_dict: dict[str, object]) -> None:
        raw = json.dumps({**sample_payload_dict, "prediction": "STRONG_BUY"})
        with pytest.raises(pydantic.ValidationError):
            parse_analysis_payload(raw)

    def test_non_object_raises(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            parse_analysis_payload("[1, 2, 3]")


# ---------------------------------------------------------------------------
# Citation extraction
# ---------------------------------------------------------------------------


class TestExtractCitations:
    """Tests for extract_citations()."""

    def test_reads_grounding_chunks(
        self, make_genai_response: Callable[..., SimpleNamespace]
    ) -> None:
        response = make_genai_response(
            "{}",
            [("Reuters", "https://reuters.com/a"), ("Bloomberg", "https://bloomberg.com/b")],
        )
        citations = extract_citations(response)
        assert [(c.title, c.url) for c in citations] == [
            ("Reuters", "https://reuters.com/a"),
            ("Bloomberg", "https://bloomberg.com/b"),
        ]

    def test_capped_at_five_in_order(
        self, make_genai_response: Callable[..., SimpleNamespace]
    ) -> None:
        chunks = [(f"Source {i}", f"https://example.com/{i}") for i in range(7)]
        citations = extract_citations(make_genai_response("{}", chunks))
        assert [c.title for c in citations] == [f"Source {i}" for i in range(5)]

    def test_custom_limit(self, make_genai_response: Callable[..., SimpleNamespace]) -> None:
        chunks = [(f"Source {i}", f"https://example.com/{i}") for i in range(4)]
        assert len(extract_citations(make_genai_response("{}", chunks), limit=2)) == 2

    def test_missing_title_and_uri_defaulted(
        self, make_genai_response: Callable[..., SimpleNamespace]
    ) -> None:
        citations = extract_citations(make_genai_response("{}", [(None, None), ("", "")]))
        assert all(c.title == "Market Source" for c in citations)
        assert all(c.url == "#" for c in citations)

    @pytest.mark.parametrize(
        "uri",
        [
            "javascript:alert(1)",
            " JavaScript:alert(document.cookie)",
            "data:text/html;base64,PHNjcmlwdD4=",
            "ftp://example.com/file",
            "//example.com/no-scheme",
            "https:no-host",
        ],
    )
    def test_unsafe_uri_replaced(
        self, make_genai_response: Callable[..., SimpleNamespace], uri: str
    ) -> None:
        citations = extract_citations(make_genai_response("{}", [("Wire", uri)]))
        assert citations[0].title == "Wire"
        assert citations[0].url == "#"

    def test_http_and_https_kept(
        self, make_genai_response: Callable[..., SimpleNamespace]
    ) -> None:
        chunks = [("A", "http://example.com/a"), ("B", "HTTPS://example.com/b")]
        citations = extract_citations(make_genai_response("{}", chunks))
        assert [c.url for c in citations] == [
            "http://example.com/a",
            "HTTPS://example.com/b",
        ]

    def test_chunk_without_web_defaulted(self) -> None:
        response = SimpleNamespace(
            candidates=[
                SimpleNamespace(
                    grounding_metadata=SimpleNamespace(grounding_chunks=[SimpleNamespace(web=None)])
                )
            ]
        )
        citations = extract_citations(response)
        assert len(citations) == 1
        assert citations[0].title == "Market Source"

    def test_no_grounding_metadata(
        self, make_genai_response: Callable[..., SimpleNamespace]
    ) -> None:
        assert extract_citations(make_genai_response("{}", None)) == []

    def test_no_candidates(self) -> None:
        assert extract_citations(SimpleNamespace(candidates=None)) == []
        assert extract_citations(SimpleNamespace(candidates=[])) == []

    def test_sdk_response_object(self) -> None:
        """A real SDK response model is read the same way."""
        response = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    grounding_metadata=types.GroundingMetadata(
                        grounding_chunks=[
                            types.GroundingChunk(
                                web=types.GroundingChunkWeb(
                                    title="Reuters", uri="https://reuters.com/a"
                                )
                            )
                        ]
                    )
                )
            ]
        )
        citations = extract_citations(response)
        assert [(c.title, c.url) for c in citations] == [("Reuters", "https://reuters.com/a")]
