"""StrEnum types for the dashboard domain.

Stance values are uppercase because that is the wire format the analysis
provider is constrained to. Use enum members in business logic, never raw
strings.
"""

from enum import StrEnum


class Stance(StrEnum):
    """Directional outlook of an AI analysis."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class ViewPhase(StrEnum):
    """Lifecycle of the dashboard's analysis panel."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
