"""One-call startup for applications embedding trustledger.

Example usage:

    from trustledger.bootstrap import bootstrap
    from trustledger.domain.charges import ChargeService

    runtime = bootstrap(gate=MyPolicyGate())
    charges = ChargeService.from_runtime(runtime)
"""

import structlog

from trustledger.analytics.sink import AnalyticsSink
from trustledger.config import get_settings
from trustledger.config.settings import Settings
from trustledger.observability.logging import setup_logging
from trustledger.runtime.container import Runtime, configure_runtime
from trustledger.security.gate import FailClosedGate, PermissionGate


def bootstrap(
    settings: Settings | None = None,
    gate: PermissionGate | None = None,
    sink: AnalyticsSink | None = None,
) -> Runtime:
    """Configure logging and the process runtime.

    `settings.app_name` is bound as `app` on every log line of the
    calling context.

    A custom gate is wrapped in FailClosedGate with the configured
    timeout, so a policy backend that errors or hangs denies.
    """
    settings = settings or get_settings()
    setup_logging(settings.observability.logging)
    structlog.contextvars.bind_contextvars(app=settings.app_name)

    if gate is not None and not isinstance(gate, FailClosedGate):
        gate = FailClosedGate(gate, timeout=settings.gate.timeout_seconds)

    return configure_runtime(settings, gate=gate, sink=sink)
