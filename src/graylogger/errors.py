"""
Graylogger exception hierarchy.

Only configuration and call-contract problems surface as exceptions.
Remote delivery failures are absorbed by the transport and never reach
the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GrayloggerError(Exception):
    """Base class for every error raised by graylogger."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(GrayloggerError):
    """Raised for an unknown severity name or transport protocol."""

    def __init__(self, message: str, *, field: str, value: Any) -> None:
        super().__init__(
            message,
            code="INVALID_CONFIGURATION",
            details={"field": field, "value": value},
        )


class KeyValueError(GrayloggerError):
    """Raised when a log call receives an odd number of key/value arguments."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"expected key/value pairs, got {count} arguments",
            code="ODD_KEY_VALUES",
            details={"count": count},
        )
