"""Tests for the analysis exception handler and request logging middleware."""

import logging

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from Alpha_Insight.utils.exceptions import (
    ANALYSIS_FAILED_MESSAGE,
    REASON_MISSING_CREDENTIALS,
    AnalysisError,
    AnalysisParseError,
)
from Alpha_Insight.web.middleware import RequestLoggingMiddleware, register_exception_handlers


def _make_test_app() -> FastAPI:
    """Create a minimal FastAPI app with handlers and logging middleware."""
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/raise-analysis")
    async def raise_analysis() -> None:
        raise AnalysisError("upstream 503 from 10.1.2.3", symbol="AAPL")

    @app.get("/raise-parse")
    async def raise_parse() -> None:
        raise AnalysisParseError(symbol="AAPL")

    @app.get("/raise-credentials")
    async def raise_credentials() -> None:
        raise AnalysisError(symbol="AAPL", reason=REASON_MISSING_CREDENTIALS)

    @app.get("/ok")
    async def ok() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


class TestExceptionHandlers:
    """Every analysis failure maps to 502 with the same detail."""

    def setup_method(self) -> None:
        self.client = TestClient(_make_test_app(), raise_server_exceptions=False)

    @pytest.mark.parametrize("path", ["/raise-analysis", "/raise-parse", "/raise-credentials"])
    def test_returns_502_with_fixed_detail(self, path: str) -> None:
        response = self.client.get(path)
        assert response.status_code == 502
        assert response.json() == {"detail": ANALYSIS_FAILED_MESSAGE}

    def test_cause_not_leaked(self) -> None:
        response = self.client.get("/raise-analysis")
        assert "10.1.2.3" not in response.text


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    def setup_method(self) -> None:
        self.client = TestClient(_make_test_app())

    def test_logs_request_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="Alpha_Insight.web.middleware"):
            self.client.get("/ok")
        records = [r for r in caplog.records if r.name == "Alpha_Insight.web.middleware"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "GET /ok -> 200" in records[0].getMessage()

    def test_health_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="Alpha_Insight.web.middleware"):
            self.client.get("/api/health")
        records = [r for r in caplog.records if r.name == "Alpha_Insight.web.middleware"]
        assert records[0].levelno == logging.DEBUG
