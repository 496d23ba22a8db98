"""Audit ledgers: bounded, append-only records of entity operations."""

from trustledger.audit.escalation import ESCALATION_KEYWORDS, should_escalate
from trustledger.audit.ledger import DEFAULT_CAPACITY, EMPTY_SUMMARY, AuditLedger
from trustledger.audit.models import AuditEntry
from trustledger.audit.registry import LedgerRegistry
from trustledger.audit.session import (
    SessionContext,
    current_session,
    end_session,
    start_session,
)

__all__ = [
    "AuditEntry",
    "AuditLedger",
    "DEFAULT_CAPACITY",
    "EMPTY_SUMMARY",
    "ESCALATION_KEYWORDS",
    "LedgerRegistry",
    "SessionContext",
    "current_session",
    "end_session",
    "should_escalate",
    "start_session",
]
