"""Centralized error definitions for datemath.

Every failure of a ``parse`` call is reported as exactly one of the errors
below; there are no partial results and nothing is retried.

Usage:
    from datemath.errors import DateMathError, handle_error

    try:
        instant = parse(text)
    except DateMathError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from datemath.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class DateMathError(Exception):
    """Base exception for all datemath errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "DATEMATH_ERROR"
    default_message: str = "Date expression could not be evaluated"
    recoverable: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Expression Errors
# =============================================================================


class InvalidExpression(DateMathError):
    """Text matches no grammar rule."""

    code = "INVALID_EXPRESSION"
    default_message = "Illegal time expression"


class InvalidDuration(DateMathError):
    """Right-hand side of a sum, or a duration token, is malformed."""

    code = "INVALID_DURATION"
    default_message = "Illegal duration"


class InvalidUnit(InvalidDuration):
    """Duration token uses an unknown unit code."""

    code = "INVALID_UNIT"
    default_message = "Illegal time unit"


class OutOfRange(DateMathError):
    """Resolved civil date falls outside the supported year window."""

    code = "OUT_OF_RANGE"
    default_message = "Date outside the supported range"


class AmbiguousZone(DateMathError):
    """Zone string cannot be resolved to an offset."""

    code = "AMBIGUOUS_ZONE"
    default_message = "Unknown time zone"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DateMathError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = True


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, DateMathError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "DateMathError",
    # Expression
    "InvalidExpression",
    "InvalidDuration",
    "InvalidUnit",
    "OutOfRange",
    "AmbiguousZone",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    # Handlers
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
]
