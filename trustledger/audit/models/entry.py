"""AuditEntry model for the audit domain."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class AuditEntry(BaseModel):
    """Immutable record of one operation on one business entity.

    `escalate` is derived once, when the ledger builds the entry, and is
    never recomputed. Exported JSON uses the camel-cased aliases
    (`subjectID`, `subjectKind`, `staffID`).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    timestamp: datetime = Field(default_factory=utc_now, description="Append time (UTC)")
    operation: str = Field(..., description="Operation name, e.g. mark_as_paid_denied")
    subject_id: str = Field(
        ..., alias="subjectID", description="Identifier of the entity"
    )
    subject_kind: str = Field(
        ..., alias="subjectKind", description="Entity domain, e.g. charge"
    )
    detail: str = Field(default="", description="Free-text description of the change")
    actor: str | None = Field(default=None, description="Who performed the operation")
    role: str | None = Field(default=None, description="Session role at append time")
    staff_id: str | None = Field(
        default=None, alias="staffID", description="Session staff id"
    )
    context: str | None = Field(default=None, description="Correlation label")
    escalate: bool = Field(default=False, description="Requires elevated review")

    @property
    def summary(self) -> str:
        """One-line human readable rendering for list views."""
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M")
        title = self.operation.replace("_", " ").title()
        parts = [f"[{stamp}] {title} ({self.detail})"]
        if self.actor:
            parts.append(f"Actor: {self.actor}")
        if self.role:
            parts.append(f"Role: {self.role}")
        if self.staff_id:
            parts.append(f"StaffID: {self.staff_id}")
        if self.context:
            parts.append(f"Context: {self.context}")
        if self.escalate:
            parts.append("Escalate: YES")
        return " | ".join(parts)
