"""Guarded mutations and the revision metadata they maintain."""

from trustledger.mutation.guard import (
    DENIED_SUFFIX,
    FAILED_SUFFIX,
    MutationGuard,
    MutationOutcome,
    MutationStatus,
)
from trustledger.mutation.revision import AuditedEntity, EntityRevisionMetadata

__all__ = [
    "DENIED_SUFFIX",
    "FAILED_SUFFIX",
    "AuditedEntity",
    "EntityRevisionMetadata",
    "MutationGuard",
    "MutationOutcome",
    "MutationStatus",
]
