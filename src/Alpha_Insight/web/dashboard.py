"""Dashboard state transitions and the controller that drives them.

The transitions are pure functions over a frozen ``DashboardState``:

    idle/success/error --select_symbol--> loading
    loading --settle_success--> success
    loading --settle_failure--> error

Overlapping selections are not serialized or cancelled. Each settle
transition applies whenever its request finishes, so the request that
settles last owns the visible result; ``settled_request_id`` records which
one that was.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import DEFAULT_HISTORY_DAYS
from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.models.dashboard import DashboardState
from Alpha_Insight.models.enums import ViewPhase
from Alpha_Insight.models.market_data import PricePoint, Quote
from Alpha_Insight.services.synthetic_data import generate_series, get_quote
from Alpha_Insight.utils.exceptions import ANALYSIS_FAILED_MESSAGE, AnalysisError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def select_symbol(
    state: DashboardState,
    *,
    symbol: str,
    series: Sequence[PricePoint],
    quote: Quote,
    request_id: int,
) -> DashboardState:
    """Start a new selection: fresh market data, analysis pending."""
    return state.model_copy(
        update={
            "symbol": symbol,
            "phase": ViewPhase.LOADING,
            "series": list(series),
            "quote": quote,
            "analysis": None,
            "error": None,
            "latest_request_id": request_id,
        }
    )


def settle_success(
    state: DashboardState,
    *,
    request_id: int,
    result: AnalysisResult,
) -> DashboardState:
    """Show *result* and clear the loading flag."""
    return state.model_copy(
        update={
            "phase": ViewPhase.SUCCESS,
            "analysis": result,
            "error": None,
            "settled_request_id": request_id,
        }
    )


def settle_failure(
    state: DashboardState,
    *,
    request_id: int,
    message: str,
) -> DashboardState:
    """Replace the analysis panel with *message*; quote and chart stay."""
    return state.model_copy(
        update={
            "phase": ViewPhase.ERROR,
            "analysis": None,
            "error": message,
            "settled_request_id": request_id,
        }
    )


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


SeriesFactory = Callable[[str, int], list[PricePoint]]
QuoteFactory = Callable[[str], Quote]


class DashboardController:
    """Owns the single dashboard state and runs the symbol-change sequence.

    Only ever called from the event loop, so each transition is atomic.
    """

    def __init__(
        self,
        analysis_service: AnalysisService,
        *,
        history_days: int = DEFAULT_HISTORY_DAYS,
        series_factory: SeriesFactory = generate_series,
        quote_factory: QuoteFactory = get_quote,
    ) -> None:
        self._analysis_service = analysis_service
        self._history_days = history_days
        self._series_factory = series_factory
        self._quote_factory = quote_factory
        self._request_ids = itertools.count(1)
        self.state = DashboardState()

    async def change_symbol(self, symbol: str) -> DashboardState:
        """Select *symbol*, refresh market data, and await its analysis.

        Returns the state as of this request's settlement, which may already
        have been overwritten by a later-settling request.
        """
        normalized = symbol.strip().upper()
        request_id = next(self._request_ids)

        series = self._series_factory(normalized, self._history_days)
        quote = self._quote_factory(normalized)
        self.state = select_symbol(
            self.state,
            symbol=normalized,
            series=series,
            quote=quote,
            request_id=request_id,
        )
        logger.info("Dashboard request %d: %s selected", request_id, normalized)

        try:
            result = await self._analysis_service.request_analysis(normalized, series)
        except AnalysisError as exc:
            self.state = settle_failure(
                self.state,
                request_id=request_id,
                message=exc.user_message,
            )
            logger.warning(
                "Dashboard request %d: analysis for %s failed (%s)",
                request_id,
                normalized,
                exc.reason,
            )
        except Exception:
            logger.exception(
                "Dashboard request %d: unexpected analysis failure for %s", request_id, normalized
            )
            self.state = settle_failure(
                self.state,
                request_id=request_id,
                message=ANALYSIS_FAILED_MESSAGE,
            )
        else:
            self.state = settle_success(self.state, request_id=request_id, result=result)
            logger.info("Dashboard request %d: analysis for %s settled", request_id, normalized)

        if request_id != self.state.latest_request_id:
            logger.debug(
                "Request %d settled after newer request %d",
                request_id,
                self.state.latest_request_id,
            )
        return self.state
