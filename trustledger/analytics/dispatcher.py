"""Fire-and-forget delivery of telemetry events."""

import asyncio
from collections.abc import Mapping
from typing import Any

from trustledger.analytics.sink import AnalyticsSink, NullAnalyticsSink
from trustledger.observability.logging import get_logger
from trustledger.observability.metrics import ANALYTICS_FAILURES

logger = get_logger(__name__)


class AnalyticsDispatcher:
    """Schedules sink deliveries as background tasks.

    `emit` returns immediately; a slow or failing sink cannot delay or
    change the outcome of the operation that emitted the event. Failures
    are logged and counted, never raised.
    """

    def __init__(self, sink: AnalyticsSink | None = None) -> None:
        self._sink = sink or NullAnalyticsSink()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def sink(self) -> AnalyticsSink:
        return self._sink

    @property
    def pending(self) -> int:
        return len(self._pending)

    def emit(self, event_name: str, info: Mapping[str, Any]) -> None:
        """Schedule delivery of one event. Must be called from a running loop."""
        payload = dict(info)
        try:
            task = asyncio.get_running_loop().create_task(
                self._deliver(event_name, payload)
            )
        except RuntimeError:
            logger.warning("analytics_no_running_loop", telemetry_event=event_name)
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(self, event_name: str, info: dict[str, Any]) -> None:
        try:
            await self._sink.log(event_name, info)
        except Exception as e:
            ANALYTICS_FAILURES.labels(event=event_name).inc()
            logger.warning(
                "analytics_sink_failed",
                telemetry_event=event_name,
                error=str(e),
                error_type=type(e).__name__,
            )
