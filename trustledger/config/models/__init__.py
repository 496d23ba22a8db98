"""Configuration section models."""

from trustledger.config.models.audit import AuditConfig
from trustledger.config.models.gate import GateConfig, GateMode
from trustledger.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)

__all__ = [
    "AuditConfig",
    "GateConfig",
    "GateMode",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
]
