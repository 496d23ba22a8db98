"""Inventory manager: stock movements plus low-stock automation.

Interactive stock changes and the background low-stock sweep can run
concurrently. Reorder-task creation is serialized so that an item never
gets two open reorder tasks.
"""

import asyncio
from uuid import UUID

from trustledger.domain.inventory.models import InventoryItem, ReorderTask
from trustledger.domain.inventory.service import SYSTEM_ACTOR, InventoryService
from trustledger.mutation.guard import MutationOutcome
from trustledger.observability.logging import get_logger

logger = get_logger(__name__)


class InventoryManager:
    """In-memory catalogue of items and their reorder tasks."""

    def __init__(self, service: InventoryService) -> None:
        self._service = service
        self._items: dict[UUID, InventoryItem] = {}
        self._tasks: list[ReorderTask] = []
        self._reorder_lock = asyncio.Lock()

    @property
    def service(self) -> InventoryService:
        return self._service

    def add(self, item: InventoryItem) -> None:
        self._items[item.id] = item

    def get(self, item_id: UUID) -> InventoryItem | None:
        return self._items.get(item_id)

    def open_tasks(self) -> list[ReorderTask]:
        return [task for task in self._tasks if not task.completed]

    def low_stock_count(self) -> int:
        return sum(
            1 for item in self._items.values() if item.is_active and item.is_low_stock
        )

    async def use_stock(
        self, item_id: UUID, quantity: int = 1, actor: str | None = None
    ) -> MutationOutcome | None:
        """Consume stock and open a reorder task if the item runs low.

        Returns None when the item is unknown.
        """
        item = self._items.get(item_id)
        if item is None:
            logger.warning("inventory_item_not_found", item_id=str(item_id))
            return None

        outcome = await self._service.change_stock(
            item, -quantity, actor, reason=f"used {quantity} unit(s)"
        )
        if outcome.allowed:
            await self._check_low_stock(item)
        return outcome

    async def receive_stock(
        self, item_id: UUID, quantity: int, actor: str | None = None
    ) -> MutationOutcome | None:
        """Add delivered stock. Returns None when the item is unknown."""
        item = self._items.get(item_id)
        if item is None:
            logger.warning("inventory_item_not_found", item_id=str(item_id))
            return None
        return await self._service.change_stock(
            item, quantity, actor, reason=f"received {quantity} unit(s)"
        )

    async def complete_task(self, task_id: UUID) -> bool:
        async with self._reorder_lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id and not task.completed:
                    self._tasks[index] = task.model_copy(update={"completed": True})
                    return True
        return False

    async def batch_check_low_stock(self) -> int:
        """Sweep every item and open missing reorder tasks.

        Returns:
            Number of tasks created
        """
        created = 0
        for item in list(self._items.values()):
            if await self._check_low_stock(item):
                created += 1
        logger.info(
            "low_stock_sweep_completed",
            tasks_created=created,
            low_stock_items=self.low_stock_count(),
        )
        return created

    async def _check_low_stock(self, item: InventoryItem) -> bool:
        async with self._reorder_lock:
            outcome = await self._service.create_reorder_task(
                item, self._tasks, actor=SYSTEM_ACTOR
            )
        if outcome.allowed:
            logger.info(
                "reorder_task_created",
                item_id=str(item.id),
                item_name=item.name,
                quantity=outcome.result.get("quantity"),
            )
        return outcome.allowed
