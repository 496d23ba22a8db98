"""Loyalty account models."""

from enum import Enum
from uuid import UUID

from pydantic import Field

from trustledger.mutation.revision import AuditedEntity


class LoyaltyBadge(str, Enum):
    """Segmentation badges shown on a customer's loyalty card."""

    HIGH_ENGAGER = "high_engager"
    AT_RISK = "at_risk"
    NEW_MEMBER = "new_member"
    PLATINUM = "platinum"
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"


class LoyaltyAccount(AuditedEntity):
    """Points, visits and badges of one customer."""

    owner_id: UUID | None = None
    points: int = Field(default=0, ge=0)
    visits: int = Field(default=0, ge=0)
    badges: list[LoyaltyBadge] = Field(default_factory=list)

    def has_badge(self, badge: LoyaltyBadge) -> bool:
        return badge in self.badges
