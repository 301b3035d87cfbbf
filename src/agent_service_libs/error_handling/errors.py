"""Exception hierarchy for agent service libraries.

Every error carries an ErrorCode for categorization and names the offending
value (address text, file path) in its message. Errors are raised to the
caller; nothing here retries.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from agent_common_core.error_enums import ErrorCode


class ServiceLibError(Exception):
    """Base exception for agent service library errors."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        """Initialize the base error.

        Args:
            error_code: The ErrorCode enum value for categorization
            message: Human-readable error message
            details: Optional dictionary of additional error context
            timestamp: Optional error timestamp (defaults to current UTC time)
        """
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.timestamp = timestamp or datetime.now(UTC)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Structured form suitable for log context."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class MalformedInputError(ServiceLibError):
    """Raised when address or MAC input cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(
            ErrorCode.MALFORMED_INPUT,
            f"{reason}: {value!r}",
            details={"value": value},
        )
        self.value = value
        self.reason = reason


class IOFailureError(ServiceLibError):
    """Raised when a TLS asset cannot be read from disk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.IO_FAILURE,
            f"{reason}: '{path}'",
            details={"path": path},
        )
        self.path = path
        self.reason = reason


class DecodeFailureError(ServiceLibError):
    """Raised when PEM data holds no usable certificate or a keypair cannot be assembled."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.DECODE_FAILURE,
            f"{reason}: '{path}'",
            details={"path": path},
        )
        self.path = path
        self.reason = reason
