"""Unit tests for health and metrics endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trustledger import __version__
from trustledger.api.app import create_app
from trustledger.config.settings import Settings
from trustledger.runtime import configure_runtime


@pytest.fixture
def app() -> FastAPI:
    """App wired to a freshly configured runtime."""
    configure_runtime(Settings())
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_healthy_with_runtime_ledgers(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["ledgers"] == 5


class TestMetricsEndpoint:
    """Tests for GET /metrics."""

    def test_exposes_prometheus_text(self, client: TestClient) -> None:
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "trustledger_gate_decisions" in response.text
        assert "trustledger_audit_entries" in response.text

    def test_custom_path_and_disabled(self) -> None:
        custom = TestClient(create_app(Settings(observability={"metrics": {"path": "/prom"}})))
        assert custom.get("/prom").status_code == 200
        assert custom.get("/metrics").status_code == 404

        disabled = TestClient(create_app(Settings(observability={"metrics": {"enabled": False}})))
        assert disabled.get("/metrics").status_code == 404
