"""Tests for DailyRevenueService."""

import asyncio
from collections.abc import Callable
from decimal import Decimal
from uuid import uuid4

import pytest

from tests.factories.doubles import RecordingGate, RecordingSink
from trustledger.domain.revenue import DailyRevenue, DailyRevenueService
from trustledger.mutation import MutationGuard

GuardFactory = Callable[[str, RecordingGate], MutationGuard]


@pytest.fixture
def service(make_guard: GuardFactory, allow_gate: RecordingGate) -> DailyRevenueService:
    return DailyRevenueService(make_guard("daily_revenue", allow_gate))


@pytest.fixture
def revenue() -> DailyRevenue:
    return DailyRevenue.created_by_actor("owner", total_amount=Decimal("100"))


class TestChargeLinks:
    """Tests for linking charges to the day."""

    @pytest.mark.asyncio
    async def test_add_charge_id(self, service: DailyRevenueService, revenue: DailyRevenue) -> None:
        charge_id = uuid4()

        outcome = await service.add_charge_id(revenue, charge_id, "bob")

        assert outcome.allowed
        assert revenue.charge_ids == [charge_id]
        assert outcome.result == {"charge_count": 1}
        entry = (await service.ledger.recent(1))[0]
        assert entry.detail == f"Added charge {charge_id}"
        assert entry.subject_kind == "daily_revenue"

    @pytest.mark.asyncio
    async def test_add_existing_is_noop(
        self, service: DailyRevenueService, revenue: DailyRevenue
    ) -> None:
        charge_id = uuid4()
        await service.add_charge_id(revenue, charge_id)

        outcome = await service.add_charge_id(revenue, charge_id)

        assert outcome.skipped
        assert revenue.charge_ids == [charge_id]

    @pytest.mark.asyncio
    async def test_concurrent_adds_keep_ids_unique(
        self, make_guard: GuardFactory, revenue: DailyRevenue
    ) -> None:
        service = DailyRevenueService(make_guard("daily_revenue", RecordingGate(delay=0.01)))
        charge_id = uuid4()

        await asyncio.gather(*(service.add_charge_id(revenue, charge_id) for _ in range(5)))

        assert revenue.charge_ids == [charge_id]

    @pytest.mark.asyncio
    async def test_remove_charge_id(
        self, service: DailyRevenueService, revenue: DailyRevenue
    ) -> None:
        keep, drop = uuid4(), uuid4()
        revenue.charge_ids = [keep, drop]

        outcome = await service.remove_charge_id(revenue, drop)

        assert outcome.allowed
        assert revenue.charge_ids == [keep]

    @pytest.mark.asyncio
    async def test_remove_missing_is_noop(
        self, service: DailyRevenueService, revenue: DailyRevenue
    ) -> None:
        outcome = await service.remove_charge_id(revenue, uuid4())
        assert outcome.skipped


class TestTotals:
    """Tests for total updates and resets."""

    @pytest.mark.asyncio
    async def test_update_total_adds_delta(
        self, service: DailyRevenueService, revenue: DailyRevenue, sink: RecordingSink
    ) -> None:
        outcome = await service.update_total(revenue, Decimal("-25.50"), "bob")
        await service.guard.analytics.drain()

        assert outcome.allowed
        assert revenue.total_amount == Decimal("74.50")
        entry = (await service.ledger.recent(1))[0]
        assert entry.detail == "Updated total by -25.50 to 74.50"
        assert sink.events[0][1]["new_total"] == "74.50"

    @pytest.mark.asyncio
    async def test_reset_revenue(self, service: DailyRevenueService, revenue: DailyRevenue) -> None:
        outcome = await service.reset_revenue(revenue, "owner")

        assert outcome.allowed
        assert revenue.is_empty
        entry = (await service.ledger.recent(1))[0]
        assert entry.operation == "reset_revenue"
        assert entry.detail == "Reset total revenue to zero (was 100.00)"

    @pytest.mark.asyncio
    async def test_reset_denied(
        self, make_guard: GuardFactory, deny_gate: RecordingGate, revenue: DailyRevenue
    ) -> None:
        service = DailyRevenueService(make_guard("daily_revenue", deny_gate))

        outcome = await service.reset_revenue(revenue)

        assert outcome.denied
        assert revenue.total_amount == Decimal("100")
        assert (await service.ledger.recent(1))[0].operation == "reset_revenue_denied"
