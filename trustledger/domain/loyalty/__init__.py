"""Customer loyalty accounts."""

from trustledger.domain.loyalty.models import LoyaltyAccount, LoyaltyBadge
from trustledger.domain.loyalty.service import LoyaltyService

__all__ = ["LoyaltyAccount", "LoyaltyBadge", "LoyaltyService"]
