"""Daily revenue aggregates."""

from trustledger.domain.revenue.models import DailyRevenue
from trustledger.domain.revenue.service import DailyRevenueService

__all__ = ["DailyRevenue", "DailyRevenueService"]
