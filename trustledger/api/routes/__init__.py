"""API route registration."""

from fastapi import FastAPI

from trustledger.api.routes.audit import router as audit_router
from trustledger.api.routes.health import get_metrics
from trustledger.api.routes.health import router as health_router
from trustledger.config.models.observability import MetricsConfig


def register_routes(app: FastAPI, metrics: MetricsConfig | None = None) -> None:
    """Attach every router to the application.

    The Prometheus endpoint is mounted at the configured path, or left
    out when metrics are disabled.
    """
    metrics = metrics or MetricsConfig()
    app.include_router(health_router, tags=["health"])
    app.include_router(audit_router, prefix="/audit", tags=["audit"])
    if metrics.enabled:
        app.add_api_route(metrics.path, get_metrics, methods=["GET"], tags=["health"])


__all__ = ["register_routes"]
