"""Dashboard view state.

DashboardState is a frozen snapshot; transitions in
``Alpha_Insight.web.dashboard`` return new instances rather than mutating.
"""

from pydantic import BaseModel, ConfigDict

from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.enums import ViewPhase
from Alpha_Insight.models.market_data import PricePoint, Quote


class DashboardState(BaseModel):
    """Everything the dashboard page renders for the current selection."""

    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    phase: ViewPhase = ViewPhase.IDLE
    series: list[PricePoint] = []
    quote: Quote | None = None
    analysis: AnalysisResult | None = None
    error: str | None = None
    latest_request_id: int = 0
    settled_request_id: int | None = None

    @property
    def is_loading(self) -> bool:
        """True while an analysis request is outstanding."""
        return self.phase == ViewPhase.LOADING
