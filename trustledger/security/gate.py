"""Permission gates deciding whether a mutating operation may proceed.

A gate answers one question, `await gate.permission(action, context)`,
and must resolve to a definite bool. Exactly one gate is configured per
process (see trustledger.runtime).
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from trustledger.audit.session import current_session
from trustledger.observability.logging import get_logger
from trustledger.observability.metrics import GATE_LATENCY

logger = get_logger(__name__)


class PermissionGate(ABC):
    """Abstract authorization check for mutating operations."""

    production_safe: bool = True

    @abstractmethod
    async def permission(self, action: str, context: Mapping[str, Any]) -> bool:
        """Decide whether `action` may run with the given context.

        Args:
            action: Operation name, e.g. "mark_as_paid"
            context: Entity id, operation fields and actor

        Returns:
            True to allow, False to deny
        """
        pass


class AllowAllGate(PermissionGate):
    """Allows everything. For previews and tests only.

    The runtime refuses this gate in a production environment.
    """

    production_safe = False

    async def permission(self, action: str, context: Mapping[str, Any]) -> bool:  # noqa: ARG002
        return True


class DenyAllGate(PermissionGate):
    """Denies everything."""

    async def permission(self, action: str, context: Mapping[str, Any]) -> bool:  # noqa: ARG002
        return False


class RoleGate(PermissionGate):
    """Allows an action when the caller's role is listed for it.

    The role comes from `context["role"]` when present, otherwise from
    the current session. Actions missing from the map get
    `default_allow`.
    """

    def __init__(
        self,
        roles: Mapping[str, Iterable[str]],
        *,
        default_allow: bool = False,
    ) -> None:
        self._roles = {action: frozenset(allowed) for action, allowed in roles.items()}
        self._default_allow = default_allow

    async def permission(self, action: str, context: Mapping[str, Any]) -> bool:
        allowed = self._roles.get(action)
        if allowed is None:
            return self._default_allow
        role = context.get("role") or current_session().role
        return role is not None and role in allowed


class FailClosedGate(PermissionGate):
    """Wraps another gate so that any failure resolves to deny.

    Exceptions, timeouts and non-bool answers from the inner gate are
    logged and turned into False.
    """

    def __init__(self, inner: PermissionGate, timeout: float | None = None) -> None:
        self._inner = inner
        self._timeout = timeout

    @property
    def inner(self) -> PermissionGate:
        return self._inner

    @property
    def production_safe(self) -> bool:  # type: ignore[override]
        return self._inner.production_safe

    async def permission(self, action: str, context: Mapping[str, Any]) -> bool:
        start = time.perf_counter()
        try:
            if self._timeout is None:
                decision = await self._inner.permission(action, context)
            else:
                decision = await asyncio.wait_for(
                    self._inner.permission(action, context), timeout=self._timeout
                )
        except TimeoutError:
            logger.warning("gate_timeout", action=action, timeout=self._timeout)
            return False
        except Exception as e:
            logger.warning(
                "gate_error",
                action=action,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        finally:
            GATE_LATENCY.labels(action=action).observe(time.perf_counter() - start)

        if not isinstance(decision, bool):
            logger.warning(
                "gate_non_bool_decision",
                action=action,
                decision_type=type(decision).__name__,
            )
            return False
        return decision
