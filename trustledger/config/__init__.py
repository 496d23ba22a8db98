"""Layered configuration: TOML files, then TRUSTLEDGER_* environment variables.

    from trustledger.config import get_settings

    capacity = get_settings().audit.capacity
"""

from functools import lru_cache

from trustledger.config.loader import load_config
from trustledger.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and validate settings once per process.

    `get_settings.cache_clear()` (or `reload_settings()`) forces the
    TOML layers to be read again.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings"]
