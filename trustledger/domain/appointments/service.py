"""Guarded operations on appointments."""

from datetime import datetime
from typing import Any

from trustledger.domain.appointments.models import Appointment, AppointmentStatus
from trustledger.domain.base import GuardedService
from trustledger.mutation.guard import MutationOutcome


class AppointmentService(GuardedService):
    domain = "appointment"

    async def book(
        self, starts_at: datetime, created_by: str | None = None, **fields: Any
    ) -> Appointment:
        appointment = Appointment.created_by_actor(
            created_by, starts_at=starts_at, **fields
        )
        await self._guard.record_creation(
            appointment,
            f"Booked {appointment.service_type} at {appointment.starts_at.isoformat()}",
            {
                "service_type": appointment.service_type,
                "starts_at": appointment.starts_at.isoformat(),
            },
        )
        return appointment

    async def update_status(
        self,
        appointment: Appointment,
        status: AppointmentStatus,
        actor: str | None = None,
    ) -> MutationOutcome:
        """Move to a new status. Setting the current status is a no-op."""
        previous = appointment.status

        def apply() -> dict[str, Any]:
            appointment.status = status
            return {"previous_status": previous.value, "status": status.value}

        return await self._guard.execute(
            appointment,
            action="update_status",
            actor=actor,
            context={"from": previous.value, "to": status.value},
            precondition=lambda: appointment.status is not status,
            apply=apply,
            detail=f"Status changed from {previous.value} to {status.value}",
        )

    async def reschedule(
        self,
        appointment: Appointment,
        starts_at: datetime,
        actor: str | None = None,
    ) -> MutationOutcome:
        """Move an open appointment to a new start time."""
        previous = appointment.starts_at

        def apply() -> dict[str, Any]:
            appointment.starts_at = starts_at
            return {"starts_at": starts_at.isoformat()}

        return await self._guard.execute(
            appointment,
            action="reschedule",
            actor=actor,
            context={"from": previous.isoformat(), "to": starts_at.isoformat()},
            precondition=lambda: not appointment.is_closed and starts_at != appointment.starts_at,
            apply=apply,
            detail=f"Rescheduled from {previous.isoformat()} to {starts_at.isoformat()}",
        )

    async def cancel(
        self,
        appointment: Appointment,
        reason: str | None = None,
        actor: str | None = None,
    ) -> MutationOutcome:
        """Cancel an open appointment. Closed appointments are left alone."""

        def apply() -> dict[str, Any]:
            appointment.status = AppointmentStatus.CANCELLED
            appointment.cancellation_reason = reason
            return {"status": AppointmentStatus.CANCELLED.value}

        return await self._guard.execute(
            appointment,
            action="cancel_appointment",
            actor=actor,
            context={"reason": reason},
            precondition=lambda: not appointment.is_closed,
            apply=apply,
            detail=f"Cancelled{f': {reason}' if reason else ''}",
        )

    async def add_note(
        self, appointment: Appointment, note: str, actor: str | None = None
    ) -> MutationOutcome:
        return await self._guard.note(appointment, note, actor)
