"""Custom exception hierarchy for the Alpha Insight application.

Analysis failures inherit from AnalysisError, which always exposes the same
flattened ``user_message``. The diagnostic cause is written to the log by
the raiser and never appears in the exception text.
"""

ANALYSIS_FAILED_MESSAGE: str = "Failed to generate AI analysis. Please try again."

REASON_PROVIDER_FAILURE: str = "provider failure"
REASON_PARSE_FAILURE: str = "parse failure"
REASON_MISSING_CREDENTIALS: str = "missing credentials"


class AnalysisError(Exception):
    """Base exception for all analysis-request failures.

    Attributes:
        symbol: The ticker symbol the analysis was requested for.
        reason: Short machine-readable failure category.
    """

    def __init__(
        self,
        message: str = ANALYSIS_FAILED_MESSAGE,
        *,
        symbol: str,
        reason: str = REASON_PROVIDER_FAILURE,
    ) -> None:
        self.symbol = symbol
        self.reason = reason
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Text safe to show in the UI, identical for every failure mode."""
        return ANALYSIS_FAILED_MESSAGE


class AnalysisParseError(AnalysisError):
    """Raised when the provider payload is not valid JSON or violates the schema."""

    def __init__(self, *, symbol: str) -> None:
        super().__init__(REASON_PARSE_FAILURE, symbol=symbol, reason=REASON_PARSE_FAILURE)


class ConfigError(Exception):
    """Raised when an environment setting cannot be interpreted."""
