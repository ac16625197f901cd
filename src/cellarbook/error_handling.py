"""
Standardized Error Handling for Cellarbook

Provides consistent error handling patterns across all modules.
"""

import logging
from typing import Optional, Any, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic functions
T = TypeVar('T')


class CellarbookError(Exception):
    """Base exception for Cellarbook."""
    pass


class ConfigurationError(CellarbookError):
    """Missing or malformed settings."""
    pass


class RepositoryError(CellarbookError):
    """Database call failed."""
    pass


class DataValidationError(CellarbookError):
    """Data validation errors."""
    pass


def handle_query_error(error: Exception, operation: str) -> None:
    """
    Standardized database error handling.

    Logs the failure and re-raises it as a RepositoryError chained from the
    original exception.

    Args:
        error: Exception raised by the Supabase client
        operation: Description of operation

    Raises:
        RepositoryError: always
    """
    if isinstance(error, CellarbookError):
        raise error

    error_type = type(error).__name__
    logger.error(f"Database error during {operation}: {error_type} - {error}")
    raise RepositoryError(f"Database error during {operation}: {error}") from error


class ErrorContext:
    """Context manager for consistent error handling."""

    def __init__(self, operation: str, fallback_value: Any = None):
        self.operation = operation
        self.fallback_value = fallback_value
        self.error: Optional[Exception] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.error = exc_val
            logger.error(f"Error in {self.operation}: {exc_type.__name__} - {exc_val}")

            # Only swallow the error when the caller gave us something to use instead
            if self.fallback_value is not None:
                return True
        return False

    @property
    def result(self) -> Any:
        """Fallback value if the block failed, else None."""
        return self.fallback_value if self.error is not None else None


__all__ = [
    'CellarbookError',
    'ConfigurationError',
    'RepositoryError',
    'DataValidationError',
    'handle_query_error',
    'ErrorContext'
]
