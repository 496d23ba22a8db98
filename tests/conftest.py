"""Shared test fixtures for the trustledger test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tests.factories.doubles import RecordingGate, RecordingSink
from trustledger.analytics.dispatcher import AnalyticsDispatcher
from trustledger.audit.ledger import AuditLedger
from trustledger.mutation.guard import MutationGuard


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "environment = 'development'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings and TOML state around each test."""
    from trustledger.config import get_settings
    from trustledger.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def clean_runtime() -> Generator[None, None, None]:
    """Forget any configured runtime around each test."""
    from trustledger.runtime.container import reset_runtime

    reset_runtime()
    yield
    reset_runtime()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def analytics(sink: RecordingSink) -> AnalyticsDispatcher:
    return AnalyticsDispatcher(sink)


@pytest.fixture
def allow_gate() -> RecordingGate:
    return RecordingGate(decision=True)


@pytest.fixture
def deny_gate() -> RecordingGate:
    return RecordingGate(decision=False)


@pytest.fixture
def make_guard(
    analytics: AnalyticsDispatcher,
) -> Callable[[str, RecordingGate], MutationGuard]:
    """Factory building a guard over a fresh ledger for a domain."""

    def _make(domain: str, gate: RecordingGate) -> MutationGuard:
        return MutationGuard(AuditLedger(domain), gate, analytics)

    return _make
