"""FastAPI app factory, Jinja2 config, static files, and custom template filters."""

import logging
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.templating import Jinja2Templates

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import AppConfig
from Alpha_Insight.logging_config import configure_logging
from Alpha_Insight.models.market_data import PricePoint
from Alpha_Insight.web.dashboard import DashboardController
from Alpha_Insight.web.middleware import RequestLoggingMiddleware, register_exception_handlers

logger = logging.getLogger(__name__)

_WEB_DIR = Path(__file__).parent
_TEMPLATES_DIR = _WEB_DIR / "templates"
_STATIC_DIR = _WEB_DIR / "static"

CHART_WIDTH: int = 600
CHART_HEIGHT: int = 240


# ---------------------------------------------------------------------------
# Custom Jinja2 Filters
# ---------------------------------------------------------------------------


def money_filter(value: str | Decimal | None) -> str:
    """Format Decimal/string as currency: '185.00' -> '$185.00'."""
    if value is None:
        return "—"
    try:
        d = Decimal(str(value))
        return f"${d:,.2f}"
    except (InvalidOperation, ValueError):
        return str(value)


def signed_filter(value: str | Decimal | None) -> str:
    """Format a signed amount with an explicit sign: 1.5 -> '+1.50'."""
    if value is None:
        return "—"
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return str(value)
    return f"{d:+,.2f}"


def pct_raw_filter(value: str | Decimal | float | None) -> str:
    """Format already-percentage value with sign: 1.234 -> '+1.23%'."""
    if value is None:
        return "—"
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return str(value)
    return f"{d:+.2f}%"


def stance_color_filter(stance: str | None) -> str:
    """Stance -> Tailwind color class."""
    colors = {
        "BULLISH": "text-emerald-400",
        "BEARISH": "text-red-400",
        "NEUTRAL": "text-zinc-400",
    }
    return colors.get(stance.upper() if stance else "", "text-zinc-400")


def chart_points_filter(
    series: Sequence[PricePoint],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> str:
    """Scale closing prices into an SVG ``polyline`` points attribute.

    The lowest price touches the bottom edge and the highest the top; a flat
    series is drawn through the vertical middle.
    """
    if not series:
        return ""
    prices = [float(p.price) for p in series]
    low, high = min(prices), max(prices)
    span = high - low
    step = width / (len(prices) - 1) if len(prices) > 1 else 0.0

    points: list[str] = []
    for index, price in enumerate(prices):
        x = index * step
        y = height / 2 if span == 0 else height - (price - low) / span * height
        points.append(f"{x:.1f},{y:.1f}")
    return " ".join(points)


templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
templates.env.filters["money"] = money_filter
templates.env.filters["signed"] = signed_filter
templates.env.filters["pct_raw"] = pct_raw_filter
templates.env.filters["stance_color"] = stance_color_filter
templates.env.filters["chart_points"] = chart_points_filter


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------


def create_app(
    config: AppConfig | None = None,
    analysis_service: AnalysisService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *config* defaults to ``AppConfig.from_env()``; *analysis_service* to one
    built from that config. Both are stored on ``app.state`` along with the
    single ``DashboardController``.
    """
    configure_logging()

    resolved_config = config or AppConfig.from_env()
    service = analysis_service or AnalysisService.from_config(resolved_config)

    app = FastAPI(title="Alpha Insight", docs_url=None, redoc_url=None)
    app.state.config = resolved_config
    app.state.analysis_service = service
    app.state.dashboard = DashboardController(
        service,
        history_days=resolved_config.history_days,
    )

    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    # Routes
    from Alpha_Insight.web.routes import analysis_router, dashboard_router, market_router

    app.include_router(dashboard_router)
    app.include_router(market_router, prefix="/api")
    app.include_router(analysis_router, prefix="/api")

    # Static files
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    # Health check
    @app.get("/api/health")
    async def health_check() -> JSONResponse:
        return JSONResponse(
            {"status": "ok", "analysis_configured": resolved_config.analysis_configured}
        )

    logger.info(
        "Alpha Insight web app created (model=%s, analysis_configured=%s)",
        resolved_config.model,
        resolved_config.analysis_configured,
    )
    return app
