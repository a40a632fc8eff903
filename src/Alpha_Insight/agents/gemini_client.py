"""Gemini client wrapper with async interface and token tracking.

Wraps the synchronous ``google.genai.Client`` in ``asyncio.to_thread()`` so
that the call never blocks the event loop. Every request is a single
non-streaming exchange with:

- a bounded thinking budget,
- the Google Search tool enabled for live grounding,
- ``application/json`` output constrained by a response schema.

There is deliberately no retry and no timeout beyond the SDK's transport
default; callers decide how to surface failures.
"""

from __future__ import annotations

import asyncio
import logging
import time

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict

from Alpha_Insight.agents._parsing import extract_citations
from Alpha_Insight.config import DEFAULT_MODEL, DEFAULT_THINKING_BUDGET
from Alpha_Insight.models.analysis import MAX_SOURCES, Citation

logger = logging.getLogger(__name__)

JSON_MIME_TYPE: str = "application/json"

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class GeminiResponse(BaseModel):
    """Parsed response from a Gemini structured-output call."""

    model_config = ConfigDict(frozen=True)

    text: str
    citations: list[Citation]
    model: str
    input_tokens: int
    output_tokens: int
    duration_ms: int


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GeminiClient:
    """Async wrapper around ``google.genai.Client`` for grounded JSON output.

    Parameters
    ----------
    api_key:
        Gemini API key, injected from ``AppConfig`` at start-up.
    model:
        Model identifier used for every call.
    thinking_budget:
        Upper bound on reasoning tokens per call.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        thinking_budget: int = DEFAULT_THINKING_BUDGET,
    ) -> None:
        self._client: genai.Client = genai.Client(api_key=api_key)
        self._model: str = model
        self._thinking_budget: int = thinking_budget

    @property
    def model(self) -> str:
        """Model identifier sent with each request."""
        return self._model

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_config(self, response_schema: types.Schema) -> types.GenerateContentConfig:
        """Return the generation config shared by every analysis request."""
        return types.GenerateContentConfig(
            thinking_config=types.ThinkingConfig(thinking_budget=self._thinking_budget),
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type=JSON_MIME_TYPE,
            response_schema=response_schema,
        )

    async def generate_json(
        self,
        prompt: str,
        *,
        response_schema: types.Schema,
        max_citations: int = MAX_SOURCES,
    ) -> GeminiResponse:
        """Send *prompt* and return the raw JSON text plus grounding citations.

        Parameters
        ----------
        prompt:
            Full prompt text (single user turn).
        response_schema:
            Structured-output schema the model must follow.
        max_citations:
            Maximum number of grounding sources to keep.

        Returns
        -------
        GeminiResponse
            Response text, citations, token counts, and timing.

        Raises
        ------
        google.genai.errors.APIError
            If the provider rejects the request.
        httpx.HTTPError
            If the transport fails.
        """
        config = self.build_config(response_schema)
        model = self._model

        def _sync_call() -> types.GenerateContentResponse:
            return self._client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )

        start = time.monotonic()
        response = await asyncio.to_thread(_sync_call)
        duration_ms = int((time.monotonic() - start) * 1000)

        usage = getattr(response, "usage_metadata", None)
        input_tokens = getattr(usage, "prompt_token_count", None) or 0
        output_tokens = getattr(usage, "candidates_token_count", None) or 0

        logger.info(
            "Gemini response: model=%s input_tokens=%d output_tokens=%d duration_ms=%d",
            model,
            input_tokens,
            output_tokens,
            duration_ms,
        )

        return GeminiResponse(
            text=getattr(response, "text", None) or "",
            citations=extract_citations(response, limit=max_citations),
            model=getattr(response, "model_version", None) or model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_ms=duration_ms,
        )
