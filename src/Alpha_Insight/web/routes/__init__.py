"""FastAPI route modules for Alpha Insight.

Re-exports all routers so the application factory can import them:
    from Alpha_Insight.web.routes import dashboard_router, market_router
"""

from Alpha_Insight.web.routes.analysis import router as analysis_router
from Alpha_Insight.web.routes.dashboard import router as dashboard_router
from Alpha_Insight.web.routes.market import router as market_router

__all__ = [
    "analysis_router",
    "dashboard_router",
    "market_router",
]
