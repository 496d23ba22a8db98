"""Shared plumbing for entity services."""

from typing import ClassVar, Self

from trustledger.audit.ledger import AuditLedger
from trustledger.mutation.guard import MutationGuard
from trustledger.runtime.container import Runtime


class GuardedService:
    """Base for services whose mutations run through a MutationGuard."""

    domain: ClassVar[str]

    def __init__(self, guard: MutationGuard) -> None:
        self._guard = guard

    @classmethod
    def from_runtime(cls, runtime: Runtime) -> Self:
        """Build the service with its domain's guard from the runtime."""
        return cls(runtime.guard_for(cls.domain))

    @property
    def guard(self) -> MutationGuard:
        return self._guard

    @property
    def ledger(self) -> AuditLedger:
        return self._guard.ledger
