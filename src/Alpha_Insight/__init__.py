"""Alpha Insight: synthetic market dashboard with AI-generated analysis."""

__version__ = "0.1.0"
