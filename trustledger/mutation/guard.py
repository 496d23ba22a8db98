"""Permission-gated, audited mutation of a single entity.

One MutationGuard serves one entity domain: it owns that domain's audit
ledger and shares the process-wide gate and telemetry dispatcher.

Each guarded call is a single allow/deny step:

    precondition fails  -> skipped (no gate check, no ledger, no telemetry)
    gate denies         -> "<action>_denied" ledger entry + telemetry, entity untouched
    gate allows         -> precondition re-checked, then mutate, advance
                           revision, ledger entry + telemetry
    apply raises        -> "<action>_failed" ledger entry + telemetry

The gate is always awaited before either branch runs; entity state is
never changed optimistically. The precondition is evaluated again once
the gate resolves, because other callers may have mutated the entity
while the decision was pending.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from trustledger.analytics.dispatcher import AnalyticsDispatcher
from trustledger.audit.ledger import AuditLedger
from trustledger.audit.models import AuditEntry, utc_now
from trustledger.mutation.revision import AuditedEntity
from trustledger.observability.logging import get_logger
from trustledger.observability.metrics import GATE_DECISIONS, MUTATIONS
from trustledger.security.gate import PermissionGate

logger = get_logger(__name__)

DENIED_SUFFIX = "_denied"
FAILED_SUFFIX = "_failed"

Detail = str | Callable[[Mapping[str, Any]], str]


class MutationStatus(str, Enum):
    """How a guarded mutation ended."""

    ALLOWED = "allowed"
    DENIED = "denied"
    SKIPPED = "skipped"
    FAILED = "failed"


class MutationOutcome(BaseModel):
    """Result of MutationGuard.execute.

    Denial is reported here rather than raised, so callers that ignore
    the return value see a silent no-op.
    """

    model_config = ConfigDict(frozen=True)

    action: str
    status: MutationStatus
    result: dict[str, Any] = Field(default_factory=dict)
    entry: AuditEntry | None = None

    @property
    def allowed(self) -> bool:
        return self.status is MutationStatus.ALLOWED

    @property
    def denied(self) -> bool:
        return self.status is MutationStatus.DENIED

    @property
    def skipped(self) -> bool:
        return self.status is MutationStatus.SKIPPED

    @property
    def failed(self) -> bool:
        return self.status is MutationStatus.FAILED


class MutationGuard:
    """Runs entity mutations through gate, ledger and telemetry."""

    def __init__(
        self,
        ledger: AuditLedger,
        gate: PermissionGate,
        analytics: AnalyticsDispatcher | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the guard.

        Args:
            ledger: Audit ledger of the entity domain
            gate: Permission gate consulted before every mutation
            analytics: Telemetry dispatcher (discards events when omitted)
            clock: Source of revision timestamps
        """
        self._ledger = ledger
        self._gate = gate
        self._analytics = analytics or AnalyticsDispatcher()
        self._clock = clock

    @property
    def ledger(self) -> AuditLedger:
        return self._ledger

    @property
    def analytics(self) -> AnalyticsDispatcher:
        return self._analytics

    @property
    def subject_key(self) -> str:
        """Context key carrying the entity id, e.g. 'charge_id'."""
        return f"{self._ledger.domain}_id"

    async def execute(
        self,
        subject: AuditedEntity,
        *,
        action: str,
        apply: Callable[[], Mapping[str, Any] | None],
        detail: Detail,
        actor: str | None = None,
        context: Mapping[str, Any] | None = None,
        denied_detail: str | None = None,
        precondition: Callable[[], bool] | None = None,
        escalate_hint: bool = False,
    ) -> MutationOutcome:
        """Run one guarded mutation on `subject`.

        Args:
            subject: Entity to mutate
            action: Operation name presented to the gate and the ledger
            apply: Synchronous mutation; returns result fields for telemetry
            detail: Ledger detail text, or a function of the result fields
            actor: Who is performing the operation
            context: Operation-specific fields shown to the gate
            denied_detail: Ledger detail text for a denial
            precondition: Returns False when the call is a true no-op
            escalate_hint: Force escalation of the success entry

        Returns:
            MutationOutcome describing which branch ran
        """
        if precondition is not None and not precondition():
            return self._skip(subject, action, stage="before_gate")

        gate_context: dict[str, Any] = {
            self.subject_key: str(subject.id),
            **(context or {}),
            "actor": actor,
        }

        permitted = await self._gate.permission(action, gate_context)
        GATE_DECISIONS.labels(
            action=action, outcome="allow" if permitted else "deny"
        ).inc()

        if not permitted:
            return await self._deny(subject, action, actor, gate_context, denied_detail)

        # no await between this check and apply()
        if precondition is not None and not precondition():
            return self._skip(subject, action, stage="after_gate")

        try:
            result = dict(apply() or {})
        except Exception as e:
            return await self._fail(subject, action, actor, gate_context, e)

        subject.revision = subject.revision.advanced(actor, self._clock())

        detail_text = detail(result) if callable(detail) else detail
        entry = await self._ledger.record(
            action,
            subject.id,
            detail_text,
            actor,
            escalate_hint=escalate_hint,
        )
        self._analytics.emit(action, {**gate_context, **result})
        MUTATIONS.labels(domain=self._ledger.domain, action=action, status="allowed").inc()
        logger.info(
            "mutation_allowed",
            domain=self._ledger.domain,
            action=action,
            subject_id=str(subject.id),
            actor=actor,
        )
        return MutationOutcome(
            action=action, status=MutationStatus.ALLOWED, result=result, entry=entry
        )

    async def note(
        self,
        subject: AuditedEntity,
        note: str,
        actor: str | None = None,
    ) -> MutationOutcome:
        """Attach a free-text note to the entity's audit trail.

        Gated like any other mutation; on success only the revision moves.
        """
        return await self.execute(
            subject,
            action="add_note",
            actor=actor,
            context={"note": note},
            apply=lambda: {"note": note},
            detail=note,
            denied_detail="Denied add_note",
        )

    async def record_creation(
        self,
        subject: AuditedEntity,
        detail: str,
        info: Mapping[str, Any] | None = None,
    ) -> AuditEntry | None:
        """Record that `subject` was created. Creation is not gated."""
        actor = subject.revision.created_by
        entry = await self._ledger.record("create", subject.id, detail, actor)
        self._analytics.emit(
            "created",
            {self.subject_key: str(subject.id), **(info or {}), "actor": actor},
        )
        return entry

    async def _deny(
        self,
        subject: AuditedEntity,
        action: str,
        actor: str | None,
        gate_context: dict[str, Any],
        denied_detail: str | None,
    ) -> MutationOutcome:
        denied_action = action + DENIED_SUFFIX
        self._analytics.emit(denied_action, gate_context)
        entry = await self._ledger.record(
            denied_action,
            subject.id,
            denied_detail or f"Denied {action}",
            actor,
            escalate_hint=False,
        )
        MUTATIONS.labels(domain=self._ledger.domain, action=action, status="denied").inc()
        logger.info(
            "mutation_denied",
            domain=self._ledger.domain,
            action=action,
            subject_id=str(subject.id),
            actor=actor,
        )
        return MutationOutcome(action=action, status=MutationStatus.DENIED, entry=entry)

    def _skip(self, subject: AuditedEntity, action: str, *, stage: str) -> MutationOutcome:
        logger.debug(
            "mutation_skipped",
            domain=self._ledger.domain,
            action=action,
            subject_id=str(subject.id),
            stage=stage,
        )
        MUTATIONS.labels(domain=self._ledger.domain, action=action, status="skipped").inc()
        return MutationOutcome(action=action, status=MutationStatus.SKIPPED)

    async def _fail(
        self,
        subject: AuditedEntity,
        action: str,
        actor: str | None,
        gate_context: dict[str, Any],
        error: Exception,
    ) -> MutationOutcome:
        """Record an apply() that raised. The revision is left where it was."""
        failed_action = action + FAILED_SUFFIX
        logger.warning(
            "mutation_failed",
            domain=self._ledger.domain,
            action=action,
            subject_id=str(subject.id),
            actor=actor,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._analytics.emit(
            failed_action, {**gate_context, "error_type": type(error).__name__}
        )
        entry = await self._ledger.record(
            failed_action,
            subject.id,
            f"Failed {action}: {type(error).__name__}",
            actor,
            escalate_hint=False,
        )
        MUTATIONS.labels(domain=self._ledger.domain, action=action, status="failed").inc()
        return MutationOutcome(action=action, status=MutationStatus.FAILED, entry=entry)
