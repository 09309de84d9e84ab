"""stylecomplete error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Symbols (registry / extraction)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Symbols (3xxx)
    SYMBOL_READ_FAILED = 3001


@dataclass(frozen=True, slots=True)
class StyleCompleteError(Exception):
    """Base error with structured context for diagnostics and CLI output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(StyleCompleteError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SymbolReadError(StyleCompleteError):
    """A style file could not be read or decoded during an update.

    Never raised out of the registry: instances are handed to the diagnostic
    channel while the previous entry for the file stays in place.
    """

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "SymbolReadError":
        return cls(
            code=ErrorCode.SYMBOL_READ_FAILED,
            message=f"Could not read {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )
