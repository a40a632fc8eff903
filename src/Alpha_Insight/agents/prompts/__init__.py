"""Versioned prompt templates for the market analysis request."""

from Alpha_Insight.agents.prompts.analysis_prompt import (
    PROMPT_VERSION,
    SUMMARY_POINTS,
    build_analysis_prompt,
    format_price_summary,
)

__all__ = [
    "PROMPT_VERSION",
    "SUMMARY_POINTS",
    "build_analysis_prompt",
    "format_price_summary",
]
