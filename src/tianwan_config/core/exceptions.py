"""Custom exceptions for Tianwan Config.

Defines a hierarchy of custom exceptions with error codes, messages,
and context information so fatal conditions are reported with enough
detail (file path, row, address) to act on.
"""

from pathlib import Path
from typing import Any


class TianwanConfigError(Exception):
    """Base exception for all Tianwan Config errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional context information
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format."""
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"[{self.code}] {self.message}"


class ConfigurationError(TianwanConfigError):
    """Raised when the generator configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        config_details = details or {}
        if path is not None:
            config_details["path"] = str(path)
        if config_key:
            config_details["config_key"] = config_key

        super().__init__(message, "CONFIGURATION_ERROR", config_details, cause)
        self.path = path
        self.config_key = config_key


class InventoryLoadError(TianwanConfigError):
    """Raised when the camera inventory workbook cannot be read."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        inventory_details = details or {}
        if path is not None:
            inventory_details["path"] = str(path)

        super().__init__(message, "INVENTORY_LOAD_ERROR", inventory_details, cause)
        self.path = path


class AllocationError(TianwanConfigError):
    """Raised when a capability cannot be bound to any server address."""

    def __init__(
        self,
        message: str,
        pool: str | None = None,
        capability: str | None = None,
        device_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        allocation_details = details or {}
        if pool:
            allocation_details["pool"] = pool
        if capability:
            allocation_details["capability"] = capability
        if device_name:
            allocation_details["device_name"] = device_name

        super().__init__(message, "ALLOCATION_ERROR", allocation_details)
        self.pool = pool
        self.capability = capability
        self.device_name = device_name


class OutputWriteError(TianwanConfigError):
    """Raised when the generated configuration cannot be serialized or written."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        output_details = details or {}
        if path is not None:
            output_details["path"] = str(path)

        super().__init__(message, "OUTPUT_WRITE_ERROR", output_details, cause)
        self.path = path
