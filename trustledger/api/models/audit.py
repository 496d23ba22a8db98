"""Response models for the audit diagnostics endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from trustledger.audit.models import AuditEntry


class LedgerInfo(BaseModel):
    domain: str
    count: int
    capacity: int


class LedgerListResponse(BaseModel):
    ledgers: list[LedgerInfo]


class RecentEntriesResponse(BaseModel):
    domain: str
    entries: list[AuditEntry]
    summaries: list[str] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    domain: str
    summary: str


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    ledgers: int
    timestamp: datetime
