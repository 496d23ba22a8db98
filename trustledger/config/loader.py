"""Locate and merge the layered TOML configuration files.

Layers, lowest precedence first:

    config/default.toml            required
    config/<TRUSTLEDGER_ENV>.toml  optional, e.g. production.toml
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "TRUSTLEDGER_CONFIG_DIR"
ENV_VAR = "TRUSTLEDGER_ENV"
DEFAULT_ENVIRONMENT = "development"

# How far up from the working directory to search for config/
_SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Resolve the directory holding the TOML files.

    An explicit TRUSTLEDGER_CONFIG_DIR must exist. Otherwise the nearest
    `config/` at or above the working directory wins, falling back to a
    relative `config/`.
    """
    explicit = os.environ.get(CONFIG_DIR_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_VAR} points to a missing directory: {path}")
        return path

    here = Path.cwd()
    for directory in [here, *here.parents][:_SEARCH_DEPTH]:
        candidate = directory / "config"
        if candidate.is_dir():
            return candidate
    return Path("config")


def get_environment() -> str:
    """Name of the active environment layer (TRUSTLEDGER_ENV)."""
    return os.environ.get(ENV_VAR) or DEFAULT_ENVIRONMENT


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file is missing
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {file_path}") from None


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay `override` on `base` without mutating either.

    Tables are merged key by key; scalars and arrays are replaced whole,
    so an environment layer can shrink a keyword list.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Read the default layer and overlay the environment layer, if any."""
    config_dir = get_config_dir()

    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Missing {default_path}; add a default.toml or set {CONFIG_DIR_VAR}"
        )
    config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.is_file():
        config = deep_merge(config, load_toml(env_path))
    return config
