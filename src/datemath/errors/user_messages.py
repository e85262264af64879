"""User-friendly error messages for datemath.

This module provides human-readable error messages and recovery suggestions
for every error code, so command line users never see a raw traceback for a
mistyped expression.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Expression errors
    "INVALID_EXPRESSION": "The text is not a date, a time or a date expression.",
    "INVALID_DURATION": "The duration after '+' or '-' could not be understood.",
    "INVALID_UNIT": "The duration uses a unit that is not supported.",
    "OUT_OF_RANGE": "The resulting date falls outside the supported years.",
    "AMBIGUOUS_ZONE": "The time zone could not be resolved.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    # Generic
    "DATEMATH_ERROR": "The date expression could not be evaluated.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    # Expression errors
    "INVALID_EXPRESSION": "Use ISO dates like '2014-05-01', anchors like 'yesterday' or durations like '-1d'.",
    "INVALID_DURATION": "Write durations as a number followed by a unit, e.g. 'now - 100y'.",
    "INVALID_UNIT": "Use one of the units ms, s, h, d, w, m or y (case sensitive).",
    "OUT_OF_RANGE": "Keep years between -9999 and 9999.",
    "AMBIGUOUS_ZONE": "Use an IANA name like 'Europe/Berlin' or an offset like '+02:00'.",
    # Configuration errors
    "CONFIGURATION_ERROR": "Run 'datemath config show' to inspect the settings.",
    "INVALID_CONFIG": "Fix the reported field or run 'datemath config init' to recreate the file.",
    # Generic
    "DATEMATH_ERROR": "Check the expression and try again.",
    "UNKNOWN_ERROR": "If the problem persists, run with --verbose and report the output.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        Recovery suggestion
    """
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format error with message and suggestion."""
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Args:
        error: The error to format

    Returns:
        CLI-formatted error message
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)
    code = getattr(error, "code", "ERROR")

    lines = [
        f"Error [{code}]: {message}",
        "",
        f"Suggestion: {suggestion}",
    ]

    if getattr(error, "details", None):
        lines.append("")
        lines.append("Details:")
        for key, value in error.details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)
