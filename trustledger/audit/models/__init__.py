"""Audit domain models."""

from trustledger.audit.models.entry import AuditEntry, utc_now

__all__ = ["AuditEntry", "utc_now"]
