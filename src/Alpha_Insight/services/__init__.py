"""Market data services.

Re-exports the generator entry points so consumers can import directly:
    from Alpha_Insight.services import generate_series, get_quote
"""

from Alpha_Insight.services.synthetic_data import generate_series, get_quote

__all__ = [
    "generate_series",
    "get_quote",
]
