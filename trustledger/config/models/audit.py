"""Audit ledger configuration models."""

from pydantic import BaseModel, Field

DEFAULT_ESCALATION_KEYWORDS: tuple[str, ...] = ("danger", "critical", "delete")


class AuditConfig(BaseModel):
    """Audit ledger configuration."""

    capacity: int = Field(
        default=200,
        gt=0,
        description="Maximum entries retained per ledger before FIFO eviction",
    )
    escalation_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ESCALATION_KEYWORDS),
        description="Case-insensitive keywords that mark an entry for escalation",
    )
    max_detail_length: int | None = Field(
        default=None,
        gt=0,
        description="Truncate detail text beyond this many characters (None = unlimited)",
    )
