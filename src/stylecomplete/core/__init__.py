"""Core module exports."""

from stylecomplete.core.errors import (
    ConfigError,
    ErrorCode,
    StyleCompleteError,
    SymbolReadError,
)
from stylecomplete.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "StyleCompleteError",
    "SymbolReadError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
]
