"""Daily revenue aggregate."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from trustledger.mutation.revision import AuditedEntity


class DailyRevenue(AuditedEntity):
    """Revenue collected on one calendar day and the charges behind it."""

    date: dt.date = Field(default_factory=dt.date.today)
    total_amount: Decimal = Decimal("0")
    charge_ids: list[UUID] = Field(default_factory=list)
    notes: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.total_amount == 0
