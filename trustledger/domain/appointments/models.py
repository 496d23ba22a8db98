"""Appointment models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import Field

from trustledger.mutation.revision import AuditedEntity


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


CLOSED_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})


class Appointment(AuditedEntity):
    """A booked service slot."""

    customer_id: UUID | None = None
    service_type: str = "full_groom"
    starts_at: datetime
    duration_minutes: int = Field(default=60, gt=0)
    staff_id: str | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    cancellation_reason: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_STATUSES
