"""Settings model: TOML layers plus TRUSTLEDGER_* environment overrides."""

from typing import Any, Literal

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from trustledger.config.models.audit import AuditConfig
from trustledger.config.models.gate import GateConfig
from trustledger.config.models.observability import ObservabilityConfig

Environment = Literal["development", "test", "staging", "production"]

# Merged TOML layers, installed by get_settings() before Settings() is built
_toml_layers: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Install the merged TOML layers read by the next Settings()."""
    global _toml_layers
    _toml_layers = dict(config)


class TomlLayerSource(PydanticBaseSettingsSource):
    """Settings source serving the merged TOML layers."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = _toml_layers.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {key: value for key, value in _toml_layers.items() if value is not None}


class Settings(BaseSettings):
    """Every configurable knob of trustledger.

    Precedence, highest first: constructor arguments, TRUSTLEDGER_*
    environment variables (`__` separates nested keys, e.g.
    TRUSTLEDGER_AUDIT__CAPACITY), the TOML layers, then the defaults
    below.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUSTLEDGER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="trustledger", description="Bound as `app` on every log line")
    environment: Environment = Field(
        default="development",
        description="Deployment environment; 'production' refuses allow-all gates",
    )

    audit: AuditConfig = Field(default_factory=AuditConfig, description="Audit ledgers")
    gate: GateConfig = Field(default_factory=GateConfig, description="Permission gate")
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging and metrics",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, TomlLayerSource(settings_cls)
