"""Pydantic v2 models, enums, and type definitions.

Re-exports all public models so consumers can import directly:
    from Alpha_Insight.models import PricePoint, Quote, AnalysisResult
"""

from Alpha_Insight.models.analysis import AnalysisPayload, AnalysisResult, Citation
from Alpha_Insight.models.dashboard import DashboardState
from Alpha_Insight.models.enums import Stance, ViewPhase
from Alpha_Insight.models.market_data import PricePoint, Quote

__all__ = [
    # Enums
    "Stance",
    "ViewPhase",
    # Market data
    "PricePoint",
    "Quote",
    # Analysis
    "AnalysisPayload",
    "AnalysisResult",
    "Citation",
    # View
    "DashboardState",
]
