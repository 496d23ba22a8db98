"""Process-wide wiring of gate, telemetry and ledgers.

The runtime is configured once at startup and frozen before concurrent
traffic begins. Reconfiguring it raises instead of swapping hooks under
running operations.
"""

from dataclasses import dataclass, field

from trustledger.analytics.dispatcher import AnalyticsDispatcher
from trustledger.analytics.sink import AnalyticsSink
from trustledger.audit.registry import LedgerRegistry
from trustledger.config.settings import Settings
from trustledger.exceptions import RuntimeConfigurationError
from trustledger.mutation.guard import MutationGuard
from trustledger.observability.logging import get_logger
from trustledger.security.factory import create_gate
from trustledger.security.gate import PermissionGate

logger = get_logger(__name__)

DOMAINS: tuple[str, ...] = (
    "appointment",
    "charge",
    "daily_revenue",
    "inventory",
    "loyalty",
)


@dataclass(frozen=True)
class Runtime:
    """Frozen bundle of the collaborators every guarded mutation needs."""

    settings: Settings
    gate: PermissionGate
    analytics: AnalyticsDispatcher
    ledgers: LedgerRegistry
    _guards: dict[str, MutationGuard] = field(default_factory=dict, repr=False)

    def guard_for(self, domain: str) -> MutationGuard:
        """Get the mutation guard of an entity domain."""
        guard = self._guards.get(domain)
        if guard is None:
            guard = self._guards.setdefault(
                domain,
                MutationGuard(self.ledgers.get(domain), self.gate, self.analytics),
            )
        return guard


_runtime: Runtime | None = None


def configure_runtime(
    settings: Settings | None = None,
    *,
    gate: PermissionGate | None = None,
    sink: AnalyticsSink | None = None,
) -> Runtime:
    """Configure the process runtime. Allowed exactly once.

    Args:
        settings: Settings to use (loaded from config files when omitted)
        gate: Permission gate; built from `settings.gate` when omitted
        sink: Telemetry sink; events are discarded when omitted

    Returns:
        The frozen runtime

    Raises:
        RuntimeConfigurationError: If already configured, or if a gate that
            is not production-safe is used in production
    """
    global _runtime
    if _runtime is not None:
        raise RuntimeConfigurationError(
            "Runtime is already configured; it cannot be changed after startup"
        )

    if settings is None:
        from trustledger.config import get_settings

        settings = get_settings()

    gate = gate or create_gate(settings.gate)
    if settings.environment == "production" and not gate.production_safe:
        raise RuntimeConfigurationError(
            f"{type(gate).__name__} allows every action and cannot run in production"
        )

    _runtime = Runtime(
        settings=settings,
        gate=gate,
        analytics=AnalyticsDispatcher(sink),
        ledgers=LedgerRegistry(settings.audit, domains=DOMAINS),
    )
    logger.info(
        "runtime_configured",
        environment=settings.environment,
        gate=type(gate).__name__,
        sink=type(_runtime.analytics.sink).__name__,
        capacity=settings.audit.capacity,
    )
    return _runtime


def get_runtime() -> Runtime:
    """Get the configured runtime.

    Raises:
        RuntimeConfigurationError: If configure_runtime has not run
    """
    if _runtime is None:
        raise RuntimeConfigurationError("Runtime is not configured; call configure_runtime()")
    return _runtime


def reset_runtime() -> None:
    """Forget the configured runtime. Intended for tests."""
    global _runtime
    _runtime = None
