"""Tianwan Config - inference configuration generator.

Builds the Tianwan video-analytics configuration from a camera inventory
workbook and a roster of inference server addresses.
"""

__version__ = "0.1.0"
__author__ = "Tianwan Config Team"

# Core exports
from .core.config import Settings, get_settings
from .core.exceptions import TianwanConfigError
from .core.logging import setup_logging

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "TianwanConfigError",
    "setup_logging",
]
