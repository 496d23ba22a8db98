"""Inventory items, stock movements and reorder automation."""

from trustledger.domain.inventory.manager import InventoryManager
from trustledger.domain.inventory.models import InventoryItem, ReorderTask
from trustledger.domain.inventory.service import SYSTEM_ACTOR, InventoryService

__all__ = [
    "SYSTEM_ACTOR",
    "InventoryItem",
    "InventoryManager",
    "InventoryService",
    "ReorderTask",
]
