"""Guarded operations on loyalty accounts."""

from typing import Any

from trustledger.domain.base import GuardedService
from trustledger.domain.loyalty.models import LoyaltyAccount, LoyaltyBadge
from trustledger.mutation.guard import MutationOutcome


class LoyaltyService(GuardedService):
    domain = "loyalty"

    async def create_account(
        self, created_by: str | None = None, **fields: Any
    ) -> LoyaltyAccount:
        account = LoyaltyAccount.created_by_actor(created_by, **fields)
        await self._guard.record_creation(
            account,
            f"Loyalty account opened with {account.points} points",
            {"points": account.points},
        )
        return account

    async def add_points(
        self,
        account: LoyaltyAccount,
        points: int,
        actor: str | None = None,
        reason: str | None = None,
    ) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            account.points += points
            return {"balance": account.points}

        return await self._guard.execute(
            account,
            action="add_points",
            actor=actor,
            context={"points": points, "reason": reason},
            precondition=lambda: points > 0,
            apply=apply,
            detail=lambda result: (
                f"Added {points} points{f' ({reason})' if reason else ''}; "
                f"balance {result['balance']}"
            ),
        )

    async def redeem_points(
        self, account: LoyaltyAccount, points: int, actor: str | None = None
    ) -> MutationOutcome:
        """Spend points. Non-positive or uncovered amounts are no-ops."""

        def apply() -> dict[str, Any]:
            account.points -= points
            return {"balance": account.points}

        return await self._guard.execute(
            account,
            action="redeem_points",
            actor=actor,
            context={"points": points},
            precondition=lambda: 0 < points <= account.points,
            apply=apply,
            detail=lambda result: f"Redeemed {points} points; balance {result['balance']}",
        )

    async def record_visit(
        self, account: LoyaltyAccount, actor: str | None = None
    ) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            account.visits += 1
            return {"visits": account.visits}

        return await self._guard.execute(
            account,
            action="record_visit",
            actor=actor,
            apply=apply,
            detail=lambda result: f"Visit recorded ({result['visits']} total)",
        )

    async def add_badge(
        self, account: LoyaltyAccount, badge: LoyaltyBadge, actor: str | None = None
    ) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            if badge not in account.badges:
                account.badges = [*account.badges, badge]
            return {"badge": badge.value}

        return await self._guard.execute(
            account,
            action="add_badge",
            actor=actor,
            context={"badge": badge.value},
            precondition=lambda: not account.has_badge(badge),
            apply=apply,
            detail=f"Added badge {badge.value}",
        )

    async def remove_badge(
        self, account: LoyaltyAccount, badge: LoyaltyBadge, actor: str | None = None
    ) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            account.badges = [b for b in account.badges if b is not badge]
            return {"badge": badge.value}

        return await self._guard.execute(
            account,
            action="remove_badge",
            actor=actor,
            context={"badge": badge.value},
            precondition=lambda: account.has_badge(badge),
            apply=apply,
            detail=f"Removed badge {badge.value}",
        )
