"""Logging and metrics settings."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """How log lines are filtered, scrubbed and rendered."""

    level: LogLevel = Field(default="INFO", description="Lowest level that is emitted")
    format: LogFormat = Field(
        default="json",
        description="'json' for log shippers, 'console' for a terminal",
    )
    redact_pii: bool = Field(
        default=True,
        description="Scrub contact and payment data from every event",
    )


class MetricsConfig(BaseModel):
    """Prometheus exposure on the diagnostics app."""

    enabled: bool = Field(default=True, description="Mount the scrape endpoint")
    path: str = Field(default="/metrics", description="Route of the scrape endpoint")


class ObservabilityConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
