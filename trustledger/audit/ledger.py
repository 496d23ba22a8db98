"""Bounded, concurrency-safe audit ledger for one entity domain."""

import asyncio
import csv
import io
from collections.abc import Callable, Iterable
from datetime import datetime

from pydantic import TypeAdapter

from trustledger.audit.escalation import ESCALATION_KEYWORDS, should_escalate
from trustledger.audit.models import AuditEntry, utc_now
from trustledger.audit.session import current_session
from trustledger.observability.logging import get_logger
from trustledger.observability.metrics import AUDIT_ENTRIES, AUDIT_EVICTIONS

logger = get_logger(__name__)

DEFAULT_CAPACITY = 200
EMPTY_SUMMARY = "no events recorded"

_entries_adapter = TypeAdapter(list[AuditEntry])
CSV_FIELDS = [
    field.alias or name for name, field in AuditEntry.model_fields.items()
]


class AuditLedger:
    """Append-only, FIFO-bounded log of audit entries.

    Every public operation goes through a single asyncio.Lock, so
    capacity eviction and snapshot reads never interleave. Readers get
    copies, never the internal list.

    Once `count` would exceed `capacity`, the oldest excess entries are
    dropped with one slice deletion inside the same critical section
    as the append.
    """

    def __init__(
        self,
        domain: str,
        *,
        capacity: int = DEFAULT_CAPACITY,
        context_label: str | None = None,
        escalation_keywords: Iterable[str] = ESCALATION_KEYWORDS,
        max_detail_length: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize an empty ledger.

        Args:
            domain: Entity domain this ledger audits (charge, inventory, ...)
            capacity: Maximum number of retained entries
            context_label: Default correlation label stamped on entries
            escalation_keywords: Keywords that flag an entry for review
            max_detail_length: Truncate longer detail text (None = keep as-is)
            clock: Source of entry timestamps
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._domain = domain
        self._capacity = capacity
        self._context_label = context_label or domain
        self._keywords = frozenset(escalation_keywords)
        self._max_detail_length = max_detail_length
        self._clock = clock
        self._entries: list[AuditEntry] = []
        self._lock = asyncio.Lock()

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def capacity(self) -> int:
        return self._capacity

    async def record(
        self,
        operation: str,
        subject_id: object,
        detail: str = "",
        actor: str | None = None,
        *,
        context: str | None = None,
        escalate_hint: bool = False,
    ) -> AuditEntry | None:
        """Append an entry, evicting the oldest ones if over capacity.

        Never raises. Returns the appended entry, or None if the entry
        could not be built.
        """
        try:
            detail_text = self._clip(str(detail))
            session = current_session()
            entry = AuditEntry(
                timestamp=self._clock(),
                operation=str(operation),
                subject_id=str(subject_id),
                subject_kind=self._domain,
                detail=detail_text,
                actor=actor,
                role=session.role,
                staff_id=session.staff_id,
                context=context or self._context_label,
                escalate=should_escalate(
                    str(operation), detail_text, escalate_hint, self._keywords
                ),
            )
        except Exception:
            logger.exception(
                "audit_entry_build_failed",
                domain=self._domain,
                operation=str(operation),
            )
            return None

        async with self._lock:
            self._entries.append(entry)
            overflow = len(self._entries) - self._capacity
            if overflow > 0:
                del self._entries[:overflow]

        AUDIT_ENTRIES.labels(
            domain=self._domain, escalate=str(entry.escalate).lower()
        ).inc()
        if overflow > 0:
            AUDIT_EVICTIONS.labels(domain=self._domain).inc(overflow)
            logger.debug("audit_entries_evicted", domain=self._domain, evicted=overflow)
        if entry.escalate:
            logger.warning(
                "audit_entry_escalated",
                domain=self._domain,
                operation=entry.operation,
                subject_id=entry.subject_id,
                actor=actor,
            )
        return entry

    async def recent(self, n: int = 5) -> list[AuditEntry]:
        """Return the last min(n, count) entries in arrival order."""
        if n <= 0:
            return []
        async with self._lock:
            return self._entries[-n:]

    async def recent_summaries(self, n: int = 5) -> list[str]:
        """Return the last min(n, count) entries as summary lines."""
        return [entry.summary for entry in await self.recent(n)]

    async def entries(self) -> list[AuditEntry]:
        """Return a snapshot of every retained entry."""
        async with self._lock:
            return list(self._entries)

    async def count(self) -> int:
        async with self._lock:
            return len(self._entries)

    async def export_last(self) -> str | None:
        """Serialize the most recent entry to JSON, or None when empty."""
        async with self._lock:
            last = self._entries[-1] if self._entries else None
        if last is None:
            return None
        try:
            return last.model_dump_json(by_alias=True, indent=2)
        except Exception:
            logger.warning("audit_export_failed", domain=self._domain, scope="last")
            return None

    async def export_all(self) -> str | None:
        """Serialize every retained entry to a JSON array, or None when empty."""
        snapshot = await self.entries()
        if not snapshot:
            return None
        try:
            return _entries_adapter.dump_json(snapshot, by_alias=True, indent=2).decode()
        except Exception:
            logger.warning("audit_export_failed", domain=self._domain, scope="all")
            return None

    async def export_csv(self) -> str | None:
        """Serialize every retained entry to CSV, or None when empty.

        One header row of the JSON field names, then one row per entry in
        arrival order. Missing values are empty cells.
        """
        snapshot = await self.entries()
        if not snapshot:
            return None
        try:
            buffer = io.StringIO()
            writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
            writer.writeheader()
            for entry in snapshot:
                row = entry.model_dump(mode="json", by_alias=True)
                row["escalate"] = "true" if entry.escalate else "false"
                writer.writerow(row)
            return buffer.getvalue()
        except Exception:
            logger.warning("audit_export_failed", domain=self._domain, scope="csv")
            return None

    async def summary(self) -> str:
        """Summary line of the last entry, or a fixed sentinel when empty."""
        async with self._lock:
            last = self._entries[-1] if self._entries else None
        return last.summary if last is not None else EMPTY_SUMMARY

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
        logger.info("audit_ledger_cleared", domain=self._domain)

    def _clip(self, detail: str) -> str:
        limit = self._max_detail_length
        if limit is None or len(detail) <= limit:
            return detail
        return detail[: max(limit - 1, 0)] + "…"
