"""Inventory models."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from trustledger.audit.models import utc_now
from trustledger.mutation.revision import AuditedEntity


class InventoryItem(AuditedEntity):
    """A stocked product or supply."""

    name: str
    sku: str | None = None
    stock_level: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=5, ge=0)
    average_monthly_usage: int | None = Field(default=None, ge=0)
    is_archived: bool = False
    is_discontinued: bool = False
    pending_reorder: bool = False
    last_stock_change_by: str | None = None

    @property
    def is_active(self) -> bool:
        return not self.is_archived and not self.is_discontinued

    @property
    def is_low_stock(self) -> bool:
        return self.stock_level <= self.low_stock_threshold

    @property
    def suggested_reorder_quantity(self) -> int:
        """Replenish up to twice the monthly usage (or threshold when unknown)."""
        usage = self.average_monthly_usage or self.low_stock_threshold
        return max(0, usage * 2 - self.stock_level)


class ReorderTask(BaseModel):
    """Follow-up task created when an item runs low."""

    id: UUID = Field(default_factory=uuid4)
    item_id: UUID
    title: str
    details: str
    quantity: int
    completed: bool = False
    created_at: datetime = Field(default_factory=utc_now)
