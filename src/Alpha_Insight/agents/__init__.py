"""AI market analysis via Gemini with structured output and search grounding."""

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.agents.gemini_client import GeminiClient, GeminiResponse

__all__ = [
    "AnalysisService",
    "GeminiClient",
    "GeminiResponse",
]
