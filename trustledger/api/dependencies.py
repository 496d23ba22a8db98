"""Dependency injection for API routes.

Routes read ledgers from the configured runtime; tests override these
dependencies with their own registries.
"""

from typing import Annotated

from fastapi import Depends

from trustledger.audit.registry import LedgerRegistry
from trustledger.runtime.container import get_runtime


def get_ledgers() -> LedgerRegistry:
    """Get the ledger registry of the configured runtime."""
    return get_runtime().ledgers


LedgersDep = Annotated[LedgerRegistry, Depends(get_ledgers)]
