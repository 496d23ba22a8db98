"""Charge models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import Field

from trustledger.audit.models import utc_now
from trustledger.mutation.revision import AuditedEntity


class ChargeType(str, Enum):
    """What a charge is for."""

    SERVICE = "service"
    PRODUCT = "product"
    ADD_ON = "add_on"
    TIP = "tip"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """How a charge was settled."""

    UNPAID = "unpaid"
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    OTHER = "other"


class Charge(AuditedEntity):
    """A billable line for a customer."""

    date: datetime = Field(default_factory=utc_now)
    amount: Decimal = Field(..., description="Charge amount")
    charge_type: ChargeType = Field(default=ChargeType.SERVICE)
    notes: str | None = None
    is_paid: bool = False
    payment_method: PaymentMethod = PaymentMethod.UNPAID
    tags: list[str] = Field(default_factory=list)
    owner_id: UUID | None = None
    appointment_id: UUID | None = None
    is_deleted: bool = False
