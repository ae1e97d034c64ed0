"""Shared exceptions for the sleep assessment system.

This module defines a consistent exception hierarchy used across all modules
to standardize error handling and provide clear error semantics.

Oracle errors never leave the assessment session: the session absorbs them
into default content or heuristic scores. Only caller misuse (invalid state
transitions, out-of-range answers) is raised to the presentation layer.
"""

from typing import Any


class SleepCheckException(Exception):
    """Base exception for all application errors.

    All domain-specific exceptions should inherit from this class
    to enable consistent error handling at the presentation layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for display or logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ===================
# State Errors
# ===================

class InvalidStateError(SleepCheckException):
    """Raised when an operation is invalid for the current state."""
    pass


class InvalidStateTransitionError(InvalidStateError):
    """Raised when a session operation is not allowed in the current phase."""

    def __init__(self, action: str, phase: str) -> None:
        super().__init__(
            f"Cannot {action} while session is {phase}",
            {"action": action, "phase": phase}
        )


class SessionBusyError(InvalidStateError):
    """Raised when a mutator is called while an oracle call is in flight."""

    def __init__(self, phase: str) -> None:
        super().__init__(
            f"Session is waiting for the text generator (current phase: {phase})",
            {"phase": phase}
        )


# ===================
# Validation Errors
# ===================

class ValidationError(SleepCheckException):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(
            f"Validation error for '{field}': {message}",
            {"field": field}
        )


class InvalidAnswerError(ValidationError):
    """Raised when an answer targets a question index that does not exist."""

    def __init__(self, index: int, question_count: int) -> None:
        super().__init__(
            "index",
            f"Question index must be between 0 and {question_count - 1}, got {index}"
        )
        self.details["index"] = index


class InvalidCategoryScoresError(ValidationError):
    """Raised when a category map does not cover exactly the fixed categories."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(
            "categories",
            f"Expected exactly the five sleep categories, got {sorted(keys)}"
        )


# ===================
# Integration Errors
# ===================

class ExternalServiceError(SleepCheckException):
    """Raised when an external service call fails."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(
            f"External service error ({service}): {message}",
            {"service": service}
        )


class LLMServiceError(ExternalServiceError):
    """Raised when LLM service fails."""

    def __init__(self, message: str) -> None:
        super().__init__("LLM", message)


class OracleError(ExternalServiceError):
    """Raised when the text generator produced no usable completion."""

    def __init__(self, message: str) -> None:
        super().__init__("Oracle", message)


class OracleTimeoutError(OracleError):
    """Raised when the text generator did not answer within the allowed time."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"No response within {timeout_seconds:g} seconds")
        self.details["timeout_seconds"] = timeout_seconds


# ===================
# Configuration Errors
# ===================

class ConfigurationError(SleepCheckException):
    """Raised when there's a configuration problem."""
    pass
