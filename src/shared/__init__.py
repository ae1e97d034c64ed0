"""Shared utilities and common code."""

from src.shared.config import Settings, get_settings
from src.shared.exceptions import (
    ConfigurationError,
    InvalidStateError,
    OracleError,
    SleepCheckException,
    ValidationError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "SleepCheckException",
    "ConfigurationError",
    "InvalidStateError",
    "OracleError",
    "ValidationError",
]
