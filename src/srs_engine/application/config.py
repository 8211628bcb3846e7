from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from srs_engine.domain.constants import DEFAULT_CACHE_CAPACITY, DEFAULT_QUEUE_CAPACITY


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/srs-engine/config.toml",
        Path.home() / ".srs-engine.toml",
    ]


class EngineConfig(BaseSettings):
    """
    Configuration for composing the scheduling engine.
    Supports loading from:
    1. Environment variables (SRS_*)
    2. Config file (~/.config/srs-engine/config.toml)
    3. Manual overrides (CLI)

    The core never reads this itself; the factory passes values in explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="SRS_",
        extra="ignore",
    )

    cache_enabled: bool = True
    cache_capacity: int = Field(default=DEFAULT_CACHE_CAPACITY, ge=0)
    queue_capacity: int = Field(default=DEFAULT_QUEUE_CAPACITY, ge=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> EngineConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in EngineConfig
    2. ~/.config/srs-engine/config.toml (if exists)
    3. Environment variables (SRS_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return EngineConfig(**overrides)
