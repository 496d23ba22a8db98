"""structlog setup for trustledger.

Audit details and telemetry fields are free text typed by staff, so
customer contact details and payment data are scrubbed before any
renderer sees them.
"""

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

from trustledger.config.models.observability import LoggingConfig

REDACTED = "[REDACTED]"

# Keys whose values never reach a log line
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "email",
    "phone",
    "phone_number",
    "card_number",
    "cvv",
    "iban",
    "account_number",
    "pin",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
CARD_PATTERN = re.compile(r"\b(?:\d[ -]?){13,19}\b")


class PIIRedactor:
    """Processor that redacts customer and payment data from log events.

    Known sensitive keys are replaced outright; string values are scanned
    for e-mail addresses and card-like digit runs.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: REDACTED if str(key).lower() in SENSITIVE_KEYS else self._redact(item)
                for key, item in value.items()
            }
        if isinstance(value, list | tuple):
            return [self._redact(item) for item in value]
        if isinstance(value, str):
            value = EMAIL_PATTERN.sub("[EMAIL]", value)
            return CARD_PATTERN.sub("[CARD]", value)
        return value


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure structured logging.

    Args:
        config: Logging settings; defaults apply when omitted
    """
    config = config or LoggingConfig()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.redact_pii:
        processors.append(PIIRedactor())

    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a trustledger module; pass `__name__`."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
