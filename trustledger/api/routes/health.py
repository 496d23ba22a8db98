"""Health check and metrics endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from trustledger import __version__
from trustledger.api.dependencies import LedgersDep
from trustledger.api.models.audit import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(ledgers: LedgersDep) -> HealthResponse:
    """Report service health and how many ledgers are live."""
    domains = ledgers.domains()
    return HealthResponse(
        status="healthy" if domains else "unhealthy",
        version=__version__,
        ledgers=len(domains),
        timestamp=datetime.now(UTC),
    )


async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
