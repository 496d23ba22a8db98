"""Audit ledger inspection endpoints.

Read-only: list views and export buttons call these; nothing here can
append to or clear a ledger.
"""

from typing import Literal

from fastapi import APIRouter, Query, Response

from trustledger.api.dependencies import LedgersDep
from trustledger.api.exceptions import LedgerNotFoundError
from trustledger.api.models.audit import (
    LedgerInfo,
    LedgerListResponse,
    RecentEntriesResponse,
    SummaryResponse,
)
from trustledger.audit.ledger import AuditLedger
from trustledger.audit.registry import LedgerRegistry
from trustledger.exceptions import UnknownLedgerError
from trustledger.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _ledger(ledgers: LedgerRegistry, domain: str) -> AuditLedger:
    try:
        return ledgers.lookup(domain)
    except UnknownLedgerError as e:
        raise LedgerNotFoundError(e.message) from e


@router.get("", response_model=LedgerListResponse)
async def list_ledgers(ledgers: LedgersDep) -> LedgerListResponse:
    """List every audit ledger with its size."""
    infos = []
    for domain in ledgers.domains():
        ledger = ledgers.lookup(domain)
        infos.append(
            LedgerInfo(domain=domain, count=await ledger.count(), capacity=ledger.capacity)
        )
    return LedgerListResponse(ledgers=infos)


@router.get("/{domain}/recent", response_model=RecentEntriesResponse)
async def recent_entries(
    domain: str,
    ledgers: LedgersDep,
    limit: int = Query(default=10, ge=1, le=1000),
) -> RecentEntriesResponse:
    """Most recent entries of a ledger, oldest first."""
    entries = await _ledger(ledgers, domain).recent(limit)
    logger.debug("audit_recent_request", domain=domain, limit=limit, returned=len(entries))
    return RecentEntriesResponse(
        domain=domain,
        entries=entries,
        summaries=[entry.summary for entry in entries],
    )


@router.get("/{domain}/summary", response_model=SummaryResponse)
async def last_summary(domain: str, ledgers: LedgersDep) -> SummaryResponse:
    """Summary line of the most recent entry."""
    return SummaryResponse(domain=domain, summary=await _ledger(ledgers, domain).summary())


@router.get("/{domain}/export")
async def export_ledger(
    domain: str,
    ledgers: LedgersDep,
    scope: Literal["all", "last", "csv"] = "all",
) -> Response:
    """Export entries as JSON, or all of them as CSV.

    204 when there is nothing to export.
    """
    ledger = _ledger(ledgers, domain)
    if scope == "csv":
        payload, media_type = await ledger.export_csv(), "text/csv"
    elif scope == "last":
        payload, media_type = await ledger.export_last(), "application/json"
    else:
        payload, media_type = await ledger.export_all(), "application/json"
    if payload is None:
        return Response(status_code=204)
    logger.info("audit_exported", domain=domain, scope=scope)
    return Response(content=payload, media_type=media_type)
