"""Terminal report rendering for the CLI."""

from Alpha_Insight.reporting.terminal import render_analysis, render_quote, render_series

__all__ = [
    "render_analysis",
    "render_quote",
    "render_series",
]
