"""Shared fixtures for web route tests.

Provides a test FastAPI app wired to a mocked AnalysisService and a
TestClient, so that route tests never reach the Gemini API.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr

from Alpha_Insight.agents.analyst import AnalysisService
from Alpha_Insight.config import AppConfig
from Alpha_Insight.models.analysis import AnalysisResult
from Alpha_Insight.web.app import create_app


@pytest.fixture()
def test_config() -> AppConfig:
    """Config with a dummy key and a short history window."""
    return AppConfig(api_key=SecretStr("test-key"), history_days=5)


@pytest.fixture()
def mock_analysis_service(sample_analysis_result: AnalysisResult) -> AsyncMock:
    """AnalysisService double that succeeds with the sample result."""
    service = AsyncMock(spec=AnalysisService)
    service.request_analysis = AsyncMock(return_value=sample_analysis_result)
    service.configured = True
    return service


@pytest.fixture()
def app(test_config: AppConfig, mock_analysis_service: AsyncMock) -> FastAPI:
    """Create a test app with the mocked analysis service."""
    return create_app(test_config, analysis_service=mock_analysis_service)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """Create a synchronous test client for the app."""
    return TestClient(app, raise_server_exceptions=False)
