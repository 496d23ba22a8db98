"""Guarded operations on inventory items."""

from typing import Any

from trustledger.domain.base import GuardedService
from trustledger.domain.inventory.models import InventoryItem, ReorderTask
from trustledger.mutation.guard import MutationOutcome

SYSTEM_ACTOR = "system"


class InventoryService(GuardedService):
    domain = "inventory"

    async def create_item(
        self, name: str, created_by: str | None = None, **fields: Any
    ) -> InventoryItem:
        item = InventoryItem.created_by_actor(created_by, name=name, **fields)
        await self._guard.record_creation(
            item,
            f"Item created: {item.name} (stock {item.stock_level})",
            {"name": item.name, "stock_level": item.stock_level},
        )
        return item

    async def change_stock(
        self,
        item: InventoryItem,
        delta: int,
        actor: str | None = None,
        reason: str | None = None,
    ) -> MutationOutcome:
        """Move stock by `delta`, never below zero.

        A zero delta, or any change on an archived or discontinued item,
        is a no-op.
        """
        before = item.stock_level

        def apply() -> dict[str, Any]:
            item.stock_level = max(0, item.stock_level + delta)
            item.last_stock_change_by = actor or SYSTEM_ACTOR
            if delta > 0:
                item.pending_reorder = False
            return {"stock_before": before, "stock_after": item.stock_level}

        suffix = f" ({reason})" if reason else ""
        return await self._guard.execute(
            item,
            action="change_stock",
            actor=actor,
            context={"delta": delta, "reason": reason},
            precondition=lambda: delta != 0 and item.is_active,
            apply=apply,
            detail=lambda result: (
                f"Stock changed from {result['stock_before']} to "
                f"{result['stock_after']} by {actor or SYSTEM_ACTOR}{suffix}"
            ),
            denied_detail=f"Denied change_stock ({delta})",
        )

    async def archive(self, item: InventoryItem, actor: str | None = None) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            item.is_archived = True
            return {"is_archived": True}

        return await self._guard.execute(
            item,
            action="archive_item",
            actor=actor,
            precondition=lambda: not item.is_archived,
            apply=apply,
            detail="Item archived",
        )

    async def discontinue(
        self, item: InventoryItem, actor: str | None = None
    ) -> MutationOutcome:
        def apply() -> dict[str, Any]:
            item.is_discontinued = True
            return {"is_discontinued": True}

        return await self._guard.execute(
            item,
            action="discontinue_item",
            actor=actor,
            precondition=lambda: not item.is_discontinued,
            apply=apply,
            detail="Item marked as discontinued",
        )

    async def create_reorder_task(
        self,
        item: InventoryItem,
        tasks: list[ReorderTask],
        actor: str = SYSTEM_ACTOR,
    ) -> MutationOutcome:
        """Open a reorder task unless one is already open for the item."""
        title = f"Re-order: {item.name}"

        def has_open_task() -> bool:
            return any(t.item_id == item.id and not t.completed for t in tasks)

        def apply() -> dict[str, Any]:
            quantity = item.suggested_reorder_quantity
            task = ReorderTask(
                item_id=item.id,
                title=title,
                details=(
                    f"Stock is at {item.stock_level}. Threshold is "
                    f"{item.low_stock_threshold}. Suggested reorder: {quantity}."
                ),
                quantity=quantity,
            )
            tasks.append(task)
            item.pending_reorder = True
            return {"task_id": str(task.id), "quantity": quantity}

        return await self._guard.execute(
            item,
            action="create_reorder_task",
            actor=actor,
            context={
                "stock_level": item.stock_level,
                # background sweeps act under the system role
                "role": SYSTEM_ACTOR if actor == SYSTEM_ACTOR else None,
            },
            precondition=lambda: item.is_active and item.is_low_stock and not has_open_task(),
            apply=apply,
            detail=lambda result: f"Created reorder task for {result['quantity']} units",
        )
