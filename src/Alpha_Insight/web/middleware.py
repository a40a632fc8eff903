"""Exception handlers and request logging middleware.

Maps ``AnalysisError`` to HTTP 502 with the flattened user message, and
logs every request's method, path, status code, and duration.
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from Alpha_Insight.utils.exceptions import AnalysisError

logger = logging.getLogger(__name__)

# Paths logged at DEBUG instead of INFO
_QUIET_PREFIXES: tuple[str, ...] = ("/static", "/api/health")


# ---------------------------------------------------------------------------
# Domain exception -> HTTP status handlers
# ---------------------------------------------------------------------------


async def _analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """Map AnalysisError to HTTP 502 without leaking the cause."""
    logger.warning("Analysis failed for %s (%s)", exc.symbol, exc.reason)
    return JSONResponse(status_code=502, content={"detail": exc.user_message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all domain exception handlers on the FastAPI application."""
    app.add_exception_handler(AnalysisError, _analysis_error_handler)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request, log timing information, and return response."""
        start_time = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start_time) * 1000
        path = request.url.path

        level = logging.DEBUG if path.startswith(_QUIET_PREFIXES) else logging.INFO
        logger.log(
            level,
            "%s %s -> %d (%.1fms)",
            request.method,
            path,
            response.status_code,
            duration_ms,
        )
        return response
