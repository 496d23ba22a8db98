"""Appointments and their lifecycle."""

from trustledger.domain.appointments.models import Appointment, AppointmentStatus
from trustledger.domain.appointments.service import AppointmentService

__all__ = ["Appointment", "AppointmentService", "AppointmentStatus"]
