"""Structured-output schema, JSON validation, and citation extraction.

The provider is asked for JSON matching ``ANALYSIS_RESPONSE_SCHEMA``, but
its reply is still treated as untrusted: the text is parsed and validated
into ``AnalysisPayload``, and grounding metadata is read defensively
because its presence depends on whether the model actually searched.

This is a private module, not exported from ``agents/__init__.py``.
"""

from __future__ import annotations

import json
import logging
import re
from urllib.parse import urlsplit

from google.genai import types

from Alpha_Insight.models.analysis import (
    DEFAULT_CITATION_TITLE,
    DEFAULT_CITATION_URL,
    MAX_SOURCES,
    AnalysisPayload,
    Citation,
)
from Alpha_Insight.models.enums import Stance

logger = logging.getLogger(__name__)

# Only these link schemes are rendered as citation hrefs
_SAFE_URL_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# Regex to strip markdown JSON fences the model sometimes wraps around output.
_JSON_FENCE_RE: re.Pattern[str] = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.DOTALL)

ANALYSIS_RESPONSE_SCHEMA: types.Schema = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(type=types.Type.STRING),
        "prediction": types.Schema(
            type=types.Type.STRING,
            enum=[stance.value for stance in Stance],
        ),
        "confidence": types.Schema(type=types.Type.NUMBER, description="Percentage 0-100"),
        "targetPrice": types.Schema(type=types.Type.NUMBER),
        "timeframe": types.Schema(type=types.Type.STRING),
        "keyFactors": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
        ),
        "technicalAnalysis": types.Schema(type=types.Type.STRING),
    },
    required=[
        "summary",
        "prediction",
        "confidence",
        "targetPrice",
        "keyFactors",
        "technicalAnalysis",
    ],
)


def _extract_json(raw: str) -> str:
    """Strip markdown fences and leading/trailing noise from *raw*.

    If the model wraps its JSON in ```json ... ```, extract the inner text.
    Otherwise return the original string stripped.
    """
    match = _JSON_FENCE_RE.search(raw)
    if match:
        return match.group(1).strip()
    return raw.strip()


def parse_analysis_payload(raw: str) -> AnalysisPayload:
    """Parse provider text into a validated ``AnalysisPayload``.

    Raises
    ------
    json.JSONDecodeError
        If the text is not JSON.
    pydantic.ValidationError
        If the JSON does not match the schema (including a non-object body).
    """
    parsed = json.loads(_extract_json(raw))
    return AnalysisPayload.model_validate(parsed)


def _safe_url(uri: str | None) -> str:
    """Return *uri* if it is an http(s) link, else the placeholder URL."""
    if not uri:
        return DEFAULT_CITATION_URL
    try:
        parts = urlsplit(uri.strip())
    except ValueError:
        return DEFAULT_CITATION_URL
    if parts.scheme.lower() not in _SAFE_URL_SCHEMES or not parts.netloc:
        logger.debug("Discarded citation URL with unsupported scheme: %r", uri[:80])
        return DEFAULT_CITATION_URL
    return uri.strip()


def extract_citations(response: object, limit: int = MAX_SOURCES) -> list[Citation]:
    """Return up to *limit* citations from a ``GenerateContentResponse``.

    Reads ``candidates[0].grounding_metadata.grounding_chunks``. Any missing
    level yields an empty list; a chunk without a title or URI gets the
    default placeholder, as does a URI that is not an http(s) link.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    citations: list[Citation] = []
    for chunk in chunks[:limit]:
        web = getattr(chunk, "web", None)
        citations.append(
            Citation(
                title=getattr(web, "title", None) or DEFAULT_CITATION_TITLE,
                url=_safe_url(getattr(web, "uri", None)),
            )
        )

    if len(chunks) > limit:
        logger.debug("Dropped %d grounding chunks beyond limit %d", len(chunks) - limit, limit)
    return citations
