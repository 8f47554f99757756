"""Configuration management for Tianwan Config.

Two layers of configuration:

* ``Settings`` - process settings (environment, logging) read from
  environment variables and ``.env`` via pydantic-settings.
* ``GeneratorConfig`` - the YAML document describing server pools, the
  inventory workbook and the capability tables for one generation run.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings

from ..models.capability import (
    DEFAULT_CAPABILITIES,
    DEFAULT_ENDPOINT_ALIASES,
    SPECIALIZED_CAPABILITY,
    TYPE_A_CAPABILITIES,
    Capability,
)
from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Process settings.

    All settings can be overridden via environment variables with the
    ``TIANWAN_`` prefix, e.g. ``TIANWAN_LOG_LEVEL=DEBUG``.
    """

    app_name: str = Field(default="Tianwan Config", description="Application name")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool | None = Field(
        default=None, description="Force JSON log rendering (None = by environment)"
    )
    logs_dir: Path | None = Field(
        default=None, description="Directory for the rotating log file"
    )

    model_config = {
        "env_prefix": "TIANWAN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment."""
        valid_envs = {"development", "testing", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v.lower()

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached process settings."""
    return Settings()


def get_settings_for_testing(**overrides: Any) -> Settings:
    """Get settings for testing with optional overrides.

    Args:
        **overrides: Settings to override

    Returns:
        Settings: Test settings instance
    """
    get_settings.cache_clear()

    test_env = {
        "TIANWAN_ENVIRONMENT": "testing",
        **{f"TIANWAN_{k.upper()}": str(v) for k, v in overrides.items()},
    }

    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    try:
        return Settings()
    finally:
        for key, original_value in original_env.items():
            if original_value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original_value


class GeneratorConfig(BaseModel):
    """Inputs of one generation run.

    Keys are accepted under the names used by existing deployments
    (``tianwan1``, ``excel_path`` ...) and under descriptive names.
    """

    model_config = {"populate_by_name": True, "extra": "ignore"}

    server_pool_a: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("tianwan1", "server_pool_a"),
        description="Addresses serving the general capabilities",
    )
    server_pool_b: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("tianwan2", "server_pool_b"),
        description="Addresses serving the specialized capability",
    )
    alert_server_url: str = Field(
        default="",
        validation_alias=AliasChoices("alert_server", "alert_server_url"),
        description="Alert server URL written to the output",
    )
    inventory_file_path: Path = Field(
        validation_alias=AliasChoices("excel_path", "inventory_file_path"),
        description="Camera inventory workbook",
    )
    excluded_device_names: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("filter_map", "excluded_device_names"),
        description="Device names never written to the output",
    )

    # Capability tables
    capability_vocabulary: dict[str, Capability] = Field(
        default_factory=dict,
        description="Extra inventory labels, merged over the built-in vocabulary",
    )
    type_a_capabilities: list[Capability] = Field(
        default_factory=lambda: list(TYPE_A_CAPABILITIES),
        description="Capabilities served by each type-A address, in naming order",
    )
    specialized_capability: Capability = Field(
        default=SPECIALIZED_CAPABILITY,
        description="Capability served by type-B addresses",
    )
    default_capabilities: list[Capability] = Field(
        default_factory=lambda: list(DEFAULT_CAPABILITIES),
        description="Capabilities guaranteed on every camera",
    )
    endpoint_aliases: dict[Capability, Capability] = Field(
        default_factory=lambda: dict(DEFAULT_ENDPOINT_ALIASES),
        description="Capabilities served behind another capability's endpoint",
    )
    label_delimiter: str = Field(
        default="、", min_length=1, description="Separator between inventory labels"
    )

    # Binding thresholds
    default_threshold: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Lower confidence threshold"
    )
    default_max_threshold: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Upper threshold, 0 means unbounded"
    )

    @field_validator("server_pool_a", "server_pool_b", "excluded_device_names", mode="before")
    @classmethod
    def empty_list_for_none(cls, v: Any) -> Any:
        """Treat an empty YAML key as an empty list."""
        return [] if v is None else v

    @field_validator("alert_server_url", mode="before")
    @classmethod
    def empty_string_for_none(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("server_pool_a", "server_pool_b")
    @classmethod
    def validate_addresses(cls, v: list[str]) -> list[str]:
        """Strip addresses and reject blanks and duplicates."""
        addresses = [str(address).strip() for address in v]
        if any(not address for address in addresses):
            raise ValueError("Server addresses must not be empty")
        if len(set(addresses)) != len(addresses):
            raise ValueError(f"Duplicate server addresses: {addresses}")
        return addresses

    @model_validator(mode="after")
    def validate_pools(self) -> "GeneratorConfig":
        """Pools must be disjoint and the specialized capability kept apart."""
        overlap = set(self.server_pool_a) & set(self.server_pool_b)
        if overlap:
            raise ValueError(
                f"Addresses listed in both server pools: {sorted(overlap)}"
            )
        if self.specialized_capability in self.type_a_capabilities:
            raise ValueError(
                f"Specialized capability '{self.specialized_capability.value}' "
                "cannot also be a type-A capability"
            )
        return self


def load_generator_config(path: Path | str) -> GeneratorConfig:
    """Load and validate a generator configuration file.

    Args:
        path: YAML configuration file

    Returns:
        GeneratorConfig: Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {e}", path=path, cause=e
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse config file: {e}", path=path, cause=e
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            "Config file must contain a mapping at the top level", path=path
        )

    try:
        return GeneratorConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            path=path,
            details={
                "errors": [
                    {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ]
            },
            cause=e,
        ) from e
