"""Dashboard routes: page shell, symbol selection partials, and state JSON."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from starlette.responses import HTMLResponse

from Alpha_Insight.config import AppConfig
from Alpha_Insight.models.dashboard import DashboardState
from Alpha_Insight.web.app import templates
from Alpha_Insight.web.dashboard import DashboardController
from Alpha_Insight.web.deps import (
    get_config,
    get_dashboard_controller,
    normalize_ticker,
    validate_ticker_symbol,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    config: Annotated[AppConfig, Depends(get_config)],
    controller: Annotated[DashboardController, Depends(get_dashboard_controller)],
) -> HTMLResponse:
    """Render the dashboard page.

    On first visit no symbol is selected yet; the page then asks for the
    default symbol as soon as it loads.
    """
    state = controller.state
    return templates.TemplateResponse(
        request,
        "pages/dashboard.html",
        {
            "state": state,
            "symbol": state.symbol or config.default_symbol,
            "popular_symbols": config.popular_symbols,
            "model_name": config.model,
        },
    )


async def _render_selection(
    request: Request,
    controller: DashboardController,
    symbol: str,
) -> HTMLResponse:
    """Run the symbol change and return the dashboard body partial."""
    state = await controller.change_symbol(symbol)
    return templates.TemplateResponse(
        request,
        "partials/dashboard_body.html",
        {"state": state},
    )


@router.post("/dashboard/select", response_class=HTMLResponse)
async def select_from_search(
    request: Request,
    controller: Annotated[DashboardController, Depends(get_dashboard_controller)],
    symbol: Annotated[str, Form()],
) -> HTMLResponse:
    """Handle the ticker search form (free text, case-insensitive)."""
    normalized = normalize_ticker(symbol)
    if normalized is None:
        raise HTTPException(status_code=422, detail=f"Invalid ticker symbol: '{symbol}'")
    return await _render_selection(request, controller, normalized)


@router.post("/dashboard/select/{symbol}", response_class=HTMLResponse)
async def select_quick_symbol(
    request: Request,
    symbol: Annotated[str, Depends(validate_ticker_symbol)],
    controller: Annotated[DashboardController, Depends(get_dashboard_controller)],
) -> HTMLResponse:
    """Handle a quick-select ticker button."""
    return await _render_selection(request, controller, symbol)


@router.get("/api/dashboard/state", response_model=DashboardState)
async def dashboard_state(
    controller: Annotated[DashboardController, Depends(get_dashboard_controller)],
) -> DashboardState:
    """Return the current dashboard state as JSON."""
    return controller.state
