"""Charges: billable lines and their payment state."""

from trustledger.domain.charges.models import Charge, ChargeType, PaymentMethod
from trustledger.domain.charges.service import ChargeService

__all__ = ["Charge", "ChargeService", "ChargeType", "PaymentMethod"]
