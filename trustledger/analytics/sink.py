"""Telemetry sinks.

A sink receives one call per telemetry event. Sinks are side-effect
only; the dispatcher in trustledger.analytics.dispatcher keeps them off
the caller's critical path and swallows their failures.
"""

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Mapping
from typing import Any

from trustledger.observability.logging import get_logger

logger = get_logger(__name__)


class AnalyticsSink(ABC):
    """Abstract telemetry emitter."""

    @abstractmethod
    async def log(self, event_name: str, info: Mapping[str, Any]) -> None:
        """Deliver one telemetry event.

        Args:
            event_name: e.g. "mark_as_paid" or "mark_as_paid_denied"
            info: Event fields
        """
        pass


class NullAnalyticsSink(AnalyticsSink):
    """Discards every event."""

    async def log(self, event_name: str, info: Mapping[str, Any]) -> None:  # noqa: ARG002
        return None


class LoggingAnalyticsSink(AnalyticsSink):
    """Writes each telemetry event as a structured log line."""

    def __init__(self, logger_name: str = "trustledger.telemetry") -> None:
        self._logger = get_logger(logger_name)

    async def log(self, event_name: str, info: Mapping[str, Any]) -> None:
        self._logger.info("telemetry_event", telemetry_event=event_name, fields=dict(info))


class InMemoryAnalyticsSink(AnalyticsSink):
    """Keeps the most recent events in a bounded buffer.

    Meant for development and tests. With `test_mode` every event is also
    written as a debug log line.
    """

    def __init__(self, max_events: int = 100, test_mode: bool = False) -> None:
        if max_events <= 0:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self._events: deque[tuple[str, dict[str, Any]]] = deque(maxlen=max_events)
        self._test_mode = test_mode

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    async def log(self, event_name: str, info: Mapping[str, Any]) -> None:
        self._events.append((event_name, dict(info)))
        if self._test_mode:
            logger.debug("telemetry_event_buffered", telemetry_event=event_name)

    def recent(self, n: int = 10) -> list[tuple[str, dict[str, Any]]]:
        """Return the last min(n, buffered) events, oldest first."""
        if n <= 0:
            return []
        return list(self._events)[-n:]

    def names(self) -> list[str]:
        return [name for name, _ in self._events]

    def clear(self) -> None:
        self._events.clear()
