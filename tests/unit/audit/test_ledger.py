"""Tests for AuditLedger."""

import asyncio
import csv
import io
import json
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from trustledger.audit import (
    EMPTY_SUMMARY,
    AuditLedger,
    end_session,
    start_session,
)


@pytest.fixture
def ledger() -> AuditLedger:
    """Create a fresh ledger for each test."""
    return AuditLedger("charge", capacity=3)


async def _operations(ledger: AuditLedger) -> list[str]:
    return [entry.operation for entry in await ledger.recent(100)]


class TestRecord:
    """Tests for appending entries."""

    @pytest.mark.asyncio
    async def test_record_returns_entry(self, ledger: AuditLedger) -> None:
        """Should build and return the appended entry."""
        subject = uuid4()
        entry = await ledger.record("mark_as_paid", subject, "Marked as paid (cash)", "alice")

        assert entry is not None
        assert entry.operation == "mark_as_paid"
        assert entry.subject_id == str(subject)
        assert entry.subject_kind == "charge"
        assert entry.actor == "alice"
        assert entry.context == "charge"
        assert entry.escalate is False
        assert await ledger.count() == 1

    @pytest.mark.asyncio
    async def test_explicit_context_overrides_label(self) -> None:
        """Should stamp the ledger label unless a context is given."""
        ledger = AuditLedger("charge", context_label="Charge")
        default = await ledger.record("a", "1")
        custom = await ledger.record("b", "1", context="checkout-42")

        assert default is not None and default.context == "Charge"
        assert custom is not None and custom.context == "checkout-42"

    @pytest.mark.asyncio
    async def test_uses_clock_for_timestamp(self) -> None:
        """Should timestamp entries with the injected clock."""
        fixed = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
        ledger = AuditLedger("charge", clock=lambda: fixed)

        entry = await ledger.record("a", "1")
        assert entry is not None
        assert entry.timestamp == fixed

    @pytest.mark.asyncio
    async def test_session_tags_are_read(self, ledger: AuditLedger) -> None:
        """Should copy role and staff id from the current session."""
        token = start_session(role="manager", staff_id="staff-7")
        try:
            entry = await ledger.record("update_amount", "1")
        finally:
            end_session(token)

        assert entry is not None
        assert entry.role == "manager"
        assert entry.staff_id == "staff-7"

    @pytest.mark.asyncio
    async def test_oversized_detail_is_stored_as_is(self, ledger: AuditLedger) -> None:
        """Should keep long detail text when no limit is configured."""
        detail = "x" * 10_000
        entry = await ledger.record("a", "1", detail)
        assert entry is not None
        assert entry.detail == detail

    @pytest.mark.asyncio
    async def test_detail_truncated_when_limit_set(self) -> None:
        """Should clip detail text beyond the configured length."""
        ledger = AuditLedger("charge", max_detail_length=10)
        entry = await ledger.record("a", "1", "abcdefghijklmnop")

        assert entry is not None
        assert len(entry.detail) == 10
        assert entry.detail.endswith("…")

    def test_rejects_non_positive_capacity(self) -> None:
        """Should refuse a ledger that can hold nothing."""
        with pytest.raises(ValueError):
            AuditLedger("charge", capacity=0)


class TestEscalation:
    """Tests for escalation tagging at append time."""

    @pytest.mark.asyncio
    async def test_delete_operation_escalates(self, ledger: AuditLedger) -> None:
        entry = await ledger.record("deleteCharge", "1", "gone")
        assert entry is not None and entry.escalate is True

    @pytest.mark.asyncio
    async def test_plain_update_does_not_escalate(self, ledger: AuditLedger) -> None:
        entry = await ledger.record("update", "1", "amount changed", escalate_hint=False)
        assert entry is not None and entry.escalate is False

    @pytest.mark.asyncio
    async def test_hint_escalates_regardless_of_keywords(self, ledger: AuditLedger) -> None:
        entry = await ledger.record("update", "1", "amount changed", escalate_hint=True)
        assert entry is not None and entry.escalate is True

    @pytest.mark.asyncio
    async def test_keyword_in_detail_escalates(self, ledger: AuditLedger) -> None:
        entry = await ledger.record("add_note", "1", "Customer flagged as CRITICAL")
        assert entry is not None and entry.escalate is True

    @pytest.mark.asyncio
    async def test_custom_keywords(self) -> None:
        ledger = AuditLedger("charge", escalation_keywords=["refund"])
        refund = await ledger.record("issue_refund", "1")
        delete = await ledger.record("delete_charge", "1")

        assert refund is not None and refund.escalate is True
        assert delete is not None and delete.escalate is False


class TestCapacity:
    """Tests for FIFO eviction."""

    @pytest.mark.asyncio
    async def test_capacity_scenario(self, ledger: AuditLedger) -> None:
        """a, b, c, d into capacity 3 leaves b, c, d."""
        for op in ("a", "b", "c", "d"):
            await ledger.record(op, "1")

        assert await _operations(ledger) == ["b", "c", "d"]

    @pytest.mark.asyncio
    async def test_count_never_exceeds_capacity(self, ledger: AuditLedger) -> None:
        for i in range(20):
            await ledger.record(f"op{i}", "1")
            assert await ledger.count() <= ledger.capacity

    @pytest.mark.asyncio
    async def test_evicts_oldest_and_keeps_order(self) -> None:
        """Exceeding capacity by k drops exactly the k oldest entries."""
        ledger = AuditLedger("inventory", capacity=5)
        for i in range(8):
            await ledger.record(f"op{i}", "1")

        assert await _operations(ledger) == ["op3", "op4", "op5", "op6", "op7"]


class TestRecent:
    """Tests for recent-entry queries."""

    @pytest.mark.asyncio
    async def test_returns_min_of_n_and_count(self) -> None:
        ledger = AuditLedger("charge", capacity=10)
        for op in ("a", "b", "c", "d"):
            await ledger.record(op, "1")

        assert [e.operation for e in await ledger.recent(2)] == ["c", "d"]
        assert [e.operation for e in await ledger.recent(10)] == ["a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_non_positive_n_returns_empty(self, ledger: AuditLedger) -> None:
        await ledger.record("a", "1")
        assert await ledger.recent(0) == []
        assert await ledger.recent(-3) == []

    @pytest.mark.asyncio
    async def test_snapshot_is_independent(self, ledger: AuditLedger) -> None:
        """Mutating the returned list must not affect the ledger."""
        await ledger.record("a", "1")
        snapshot = await ledger.recent(5)
        snapshot.clear()

        await ledger.record("b", "1")
        assert await _operations(ledger) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_recent_summaries(self, ledger: AuditLedger) -> None:
        await ledger.record("mark_as_paid", "1", "Marked as paid (card)", "bob")
        summaries = await ledger.recent_summaries(5)

        assert len(summaries) == 1
        assert "Mark As Paid (Marked as paid (card))" in summaries[0]
        assert "Actor: bob" in summaries[0]


class TestExport:
    """Tests for JSON and CSV export."""

    @pytest.mark.asyncio
    async def test_export_last_empty_returns_none(self, ledger: AuditLedger) -> None:
        assert await ledger.export_last() is None

    @pytest.mark.asyncio
    async def test_export_all_empty_returns_none(self, ledger: AuditLedger) -> None:
        assert await ledger.export_all() is None

    @pytest.mark.asyncio
    async def test_export_last_parses_back(self, ledger: AuditLedger) -> None:
        await ledger.record("a", "first")
        await ledger.record("delete_charge", "second", "removed", "carol")

        payload = await ledger.export_last()
        assert payload is not None
        data = json.loads(payload)

        assert data["operation"] == "delete_charge"
        assert data["subjectID"] == "second"
        assert data["subjectKind"] == "charge"
        assert data["actor"] == "carol"
        assert data["escalate"] is True
        assert "staffID" in data and "role" in data and "context" in data
        datetime.fromisoformat(data["timestamp"])

    @pytest.mark.asyncio
    async def test_export_all_lists_every_entry(self, ledger: AuditLedger) -> None:
        for op in ("a", "b"):
            await ledger.record(op, "1")

        payload = await ledger.export_all()
        assert payload is not None
        assert [item["operation"] for item in json.loads(payload)] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_export_csv_empty_returns_none(self, ledger: AuditLedger) -> None:
        assert await ledger.export_csv() is None

    @pytest.mark.asyncio
    async def test_export_csv_header_and_rows(self, ledger: AuditLedger) -> None:
        await ledger.record("mark_as_paid", "c-1", "Marked as paid", "alice")
        await ledger.record("delete_charge", "c-2", "removed")

        payload = await ledger.export_csv()
        assert payload is not None
        rows = list(csv.reader(io.StringIO(payload)))

        assert rows[0] == [
            "id",
            "timestamp",
            "operation",
            "subjectID",
            "subjectKind",
            "detail",
            "actor",
            "role",
            "staffID",
            "context",
            "escalate",
        ]
        assert len(rows) == 3
        first = dict(zip(rows[0], rows[1], strict=True))
        assert first["operation"] == "mark_as_paid"
        assert first["subjectKind"] == "charge"
        assert first["actor"] == "alice"
        assert first["role"] == ""
        assert first["escalate"] == "false"
        datetime.fromisoformat(first["timestamp"])
        assert dict(zip(rows[0], rows[2], strict=True))["escalate"] == "true"

    @pytest.mark.asyncio
    async def test_export_csv_quotes_awkward_detail(self, ledger: AuditLedger) -> None:
        detail = 'Refund "partial", see note\nsecond line'
        await ledger.record("refund", "c-1", detail, "o'brien, pat")

        payload = await ledger.export_csv()
        assert payload is not None
        reader = csv.DictReader(io.StringIO(payload))
        row = next(reader)

        assert row["detail"] == detail
        assert row["actor"] == "o'brien, pat"
        assert next(reader, None) is None


class TestSummaryAndClear:
    """Tests for summary and clear."""

    @pytest.mark.asyncio
    async def test_summary_empty_sentinel(self, ledger: AuditLedger) -> None:
        assert await ledger.summary() == EMPTY_SUMMARY

    @pytest.mark.asyncio
    async def test_summary_of_last_entry(self) -> None:
        stamp = datetime(2026, 1, 2, 3, 4, tzinfo=UTC)
        ledger = AuditLedger("charge", clock=lambda: stamp)
        await ledger.record("delete_charge", "1", "removed", "dana")

        summary = await ledger.summary()
        assert summary.startswith("[2026-01-02 03:04] Delete Charge (removed)")
        assert "Escalate: YES" in summary

    @pytest.mark.asyncio
    async def test_clear_empties_ledger(self, ledger: AuditLedger) -> None:
        await ledger.record("a", "1")
        await ledger.clear()

        assert await ledger.count() == 0
        assert await ledger.summary() == EMPTY_SUMMARY


class TestConcurrency:
    """Concurrent callers must not lose updates."""

    @pytest.mark.asyncio
    async def test_concurrent_records_are_all_kept(self) -> None:
        workers, per_worker = 20, 25
        ledger = AuditLedger("charge", capacity=workers * per_worker)

        async def worker(n: int) -> None:
            for i in range(per_worker):
                await ledger.record(f"w{n}-{i}", str(n))
                await asyncio.sleep(0)

        await asyncio.gather(*(worker(n) for n in range(workers)))

        entries = await ledger.entries()
        assert len(entries) == workers * per_worker
        assert len({e.operation for e in entries}) == workers * per_worker

    @pytest.mark.asyncio
    async def test_concurrent_records_respect_capacity(self) -> None:
        ledger = AuditLedger("charge", capacity=50)

        async def worker(n: int) -> None:
            for i in range(40):
                await ledger.record(f"w{n}-{i}", str(n))
                assert await ledger.count() <= 50

        await asyncio.gather(*(worker(n) for n in range(10)))
        assert await ledger.count() == 50

    @pytest.mark.asyncio
    async def test_per_worker_order_survives(self) -> None:
        """Entries from one caller keep their relative order."""
        ledger = AuditLedger("charge", capacity=1000)
        start = datetime.now(UTC)

        async def worker(n: int) -> None:
            for i in range(10):
                await ledger.record(f"w{n}", str(i))
                await asyncio.sleep(0)

        await asyncio.gather(*(worker(n) for n in range(5)))

        for n in range(5):
            seq = [e.subject_id for e in await ledger.entries() if e.operation == f"w{n}"]
            assert seq == [str(i) for i in range(10)]
        assert all(e.timestamp >= start - timedelta(seconds=1) for e in await ledger.entries())
