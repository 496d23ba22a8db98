"""Guarded operations on daily revenue aggregates."""

from decimal import Decimal
from typing import Any
from uuid import UUID

from trustledger.domain.base import GuardedService
from trustledger.domain.revenue.models import DailyRevenue
from trustledger.mutation.guard import MutationOutcome


class DailyRevenueService(GuardedService):
    domain = "daily_revenue"

    async def create_daily_revenue(
        self,
        created_by: str | None = None,
        **fields: Any,
    ) -> DailyRevenue:
        revenue = DailyRevenue.created_by_actor(created_by, **fields)
        await self._guard.record_creation(
            revenue,
            f"Created with total {revenue.total_amount:.2f}",
            {"date": revenue.date.isoformat(), "total_amount": str(revenue.total_amount)},
        )
        return revenue

    async def add_charge_id(
        self, revenue: DailyRevenue, charge_id: UUID, actor: str | None = None
    ) -> MutationOutcome:
        """Link a charge. Linking an already linked charge is a no-op."""

        def apply() -> dict[str, Any]:
            if charge_id not in revenue.charge_ids:
                revenue.charge_ids = [*revenue.charge_ids, charge_id]
            return {"charge_count": len(revenue.charge_ids)}

        return await self._guard.execute(
            revenue,
            action="add_charge_id",
            actor=actor,
            context={"charge_id": str(charge_id)},
            precondition=lambda: charge_id not in revenue.charge_ids,
            apply=apply,
            detail=f"Added charge {charge_id}",
            denied_detail=f"Denied add_charge_id ({charge_id})",
        )

    async def remove_charge_id(
        self, revenue: DailyRevenue, charge_id: UUID, actor: str | None = None
    ) -> MutationOutcome:
        """Unlink a charge. Unlinking a charge that is not linked is a no-op."""

        def apply() -> dict[str, Any]:
            revenue.charge_ids = [cid for cid in revenue.charge_ids if cid != charge_id]
            return {"charge_count": len(revenue.charge_ids)}

        return await self._guard.execute(
            revenue,
            action="remove_charge_id",
            actor=actor,
            context={"charge_id": str(charge_id)},
            precondition=lambda: charge_id in revenue.charge_ids,
            apply=apply,
            detail=f"Removed charge {charge_id}",
            denied_detail=f"Denied remove_charge_id ({charge_id})",
        )

    async def update_total(
        self, revenue: DailyRevenue, amount: Decimal, actor: str | None = None
    ) -> MutationOutcome:
        """Add `amount` (may be negative) to the day's total."""

        def apply() -> dict[str, Any]:
            revenue.total_amount = revenue.total_amount + Decimal(str(amount))
            return {"new_total": str(revenue.total_amount)}

        return await self._guard.execute(
            revenue,
            action="update_total",
            actor=actor,
            context={"amount": str(amount)},
            apply=apply,
            detail=lambda result: f"Updated total by {amount} to {result['new_total']}",
            denied_detail=f"Denied update_total ({amount})",
        )

    async def reset_revenue(
        self, revenue: DailyRevenue, actor: str | None = None
    ) -> MutationOutcome:
        previous = revenue.total_amount

        def apply() -> dict[str, Any]:
            revenue.total_amount = Decimal("0")
            return {"previous_total": str(previous)}

        return await self._guard.execute(
            revenue,
            action="reset_revenue",
            actor=actor,
            apply=apply,
            detail=f"Reset total revenue to zero (was {previous:.2f})",
            denied_detail="Denied reset_revenue",
        )
