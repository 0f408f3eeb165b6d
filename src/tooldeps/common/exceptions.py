"""Custom exceptions for tooldeps.

Only caller misuse raises: unknown tools, missing edges and absent paths
are reported as empty results by the graph engine.
"""

from typing import Any


class ToolDepsError(Exception):
    """Base exception for all tooldeps errors."""

    exit_code: int = 1
    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize exception with optional details.

        Args:
            message: Human-readable error message.
            details: Additional error details for debugging.
            cause: Original exception that caused this error.
        """
        self.message = message or self.message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        result = {
            "success": False,
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# Caller misuse
class ValidationError(ToolDepsError):
    """Input validation failed."""

    exit_code = 2
    error_code = "VALIDATION_ERROR"
    message = "Input validation failed"


class InvalidToolDataError(ValidationError):
    """Tool or dependency record could not be loaded."""

    error_code = "INVALID_TOOL_DATA"
    message = "Invalid tool or dependency record"


class InvalidQueryError(ValidationError):
    """Invalid query parameters."""

    error_code = "INVALID_QUERY"
    message = "Invalid query parameters"


# Lookups that callers chose to treat as fatal
class NotFoundError(ToolDepsError):
    """Resource not found."""

    error_code = "NOT_FOUND"
    message = "Resource not found"


class ToolNotFoundError(NotFoundError):
    """Tool not found."""

    error_code = "TOOL_NOT_FOUND"
    message = "Tool not found"


# Configuration
class ConfigurationError(ToolDepsError):
    """Configuration error."""

    error_code = "CONFIGURATION_ERROR"
    message = "Configuration error"
