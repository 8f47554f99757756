"""Core functionality for Tianwan Config."""

from .config import GeneratorConfig, Settings, get_settings, load_generator_config
from .exceptions import (
    AllocationError,
    ConfigurationError,
    InventoryLoadError,
    OutputWriteError,
    TianwanConfigError,
)
from .logging import setup_logging

__all__ = [
    "GeneratorConfig",
    "Settings",
    "get_settings",
    "load_generator_config",
    "TianwanConfigError",
    "ConfigurationError",
    "InventoryLoadError",
    "AllocationError",
    "OutputWriteError",
    "setup_logging",
]
