"""Prompt builder for the single-shot market analysis request.

The model receives one user turn: the ticker, the tail of its price
history, and the research tasks. The JSON shape is enforced by the
structured-output schema in ``agents/_parsing.py``, not by prompt text.
"""

from collections.abc import Sequence

from Alpha_Insight.models.market_data import PricePoint

PROMPT_VERSION: str = "v1.0"

# Number of most recent price points embedded in the prompt
SUMMARY_POINTS: int = 10

_ANALYSIS_PROMPT: str = """\
# VERSION: {version}

Act as a professional quantitative stock analyst.
Analyze the current market situation and future outlook for the stock symbol: {symbol}.

Recent historical data provided:
{price_summary}

Task:
1. Use Google Search to find the latest news, earnings reports, and \
macroeconomic factors affecting {symbol}.
2. Perform technical analysis based on the provided price trends.
3. Evaluate market sentiment.
4. Provide a 30-day price prediction.

IMPORTANT: Be objective. This is for analysis purposes.
"""


def format_price_summary(
    series: Sequence[PricePoint],
    limit: int = SUMMARY_POINTS,
) -> str:
    """Render the last *limit* points, oldest first, one per line.

    Each line reads ``2025-01-15: $186.75 (Vol: 52340000)``.
    """
    tail = list(series)[-limit:] if limit > 0 else []
    return "\n".join(f"{p.date.isoformat()}: ${p.price} (Vol: {p.volume})" for p in tail)


def build_analysis_prompt(symbol: str, series: Sequence[PricePoint]) -> str:
    """Build the analysis prompt for *symbol* from its recent *series*.

    Parameters
    ----------
    symbol:
        Uppercase ticker symbol.
    series:
        Chronological price history; only the last ``SUMMARY_POINTS`` are used.

    Returns
    -------
    str
        Prompt text ready to send as the request contents.
    """
    return _ANALYSIS_PROMPT.format(
        version=PROMPT_VERSION,
        symbol=symbol,
        price_summary=format_price_summary(series),
    )
