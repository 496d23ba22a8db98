"""Telemetry sinks and their fire-and-forget dispatcher."""

from trustledger.analytics.dispatcher import AnalyticsDispatcher
from trustledger.analytics.sink import (
    AnalyticsSink,
    InMemoryAnalyticsSink,
    LoggingAnalyticsSink,
    NullAnalyticsSink,
)

__all__ = [
    "AnalyticsDispatcher",
    "AnalyticsSink",
    "InMemoryAnalyticsSink",
    "LoggingAnalyticsSink",
    "NullAnalyticsSink",
]
