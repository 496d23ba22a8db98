"""Unit tests for logging setup and PII redaction."""

import structlog

from trustledger.config.models.observability import LoggingConfig
from trustledger.observability.logging import (
    REDACTED,
    PIIRedactor,
    get_logger,
    setup_logging,
)


class TestPIIRedactor:
    """Tests for the redaction processor."""

    def _redact(self, **event: object) -> dict[str, object]:
        return dict(PIIRedactor()(None, "info", dict(event)))

    def test_sensitive_keys_replaced(self) -> None:
        result = self._redact(event="login", email="a@b.co", card_number="4111")
        assert result["email"] == REDACTED
        assert result["card_number"] == REDACTED
        assert result["event"] == "login"

    def test_email_in_text(self) -> None:
        result = self._redact(event="note", detail="Call jane.doe@example.com tomorrow")
        assert result["detail"] == "Call [EMAIL] tomorrow"

    def test_card_number_in_text(self) -> None:
        result = self._redact(event="note", detail="paid with 4111 1111 1111 1111")
        assert "4111" not in str(result["detail"])
        assert "[CARD]" in str(result["detail"])

    def test_nested_fields(self) -> None:
        result = self._redact(event="telemetry_event", fields={"phone": "555", "points": 10})
        assert result["fields"] == {"phone": REDACTED, "points": 10}

    def test_plain_values_untouched(self) -> None:
        result = self._redact(event="mark_as_paid", amount=45, method="cash")
        assert result == {"event": "mark_as_paid", "amount": 45, "method": "cash"}


class TestSetupLogging:
    """Tests for structlog configuration."""

    def test_json_with_redaction(self) -> None:
        setup_logging(LoggingConfig(level="DEBUG", format="json", redact_pii=True))

        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, PIIRedactor) for p in processors)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_without_redaction(self) -> None:
        setup_logging(LoggingConfig(format="console", redact_pii=False))

        processors = structlog.get_config()["processors"]
        assert not any(isinstance(p, PIIRedactor) for p in processors)
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_get_logger_logs(self) -> None:
        setup_logging()
        get_logger(__name__).info("test_event", domain="charge")
