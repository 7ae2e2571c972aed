"""
Shared exception types for workshop_db.
Stable surface; extend only. Every failure the data-access layer reports is one of these.
"""

from __future__ import annotations

from typing import Optional


class WorkshopDbError(Exception):
    """Base exception for workshop_db; catch this for any package-raised error."""

    pass


class ConfigurationError(WorkshopDbError):
    """Unknown acquisition mode or invalid config value. Raised before any I/O."""

    pass


class StoreIOError(WorkshopDbError):
    """Setup script unreadable, or store file missing/unopenable."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class InitializationError(WorkshopDbError):
    """Setup script failed against a fresh in-memory store."""

    pass


class OperationNotFoundError(WorkshopDbError, KeyError):
    """Operation name is not in the query catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown operation '{self.name}'"


class ArityError(WorkshopDbError, ValueError):
    """Parameter count does not match the template's arity."""

    def __init__(self, name: str, expected: int, got: int) -> None:
        super().__init__(f"Operation '{name}' takes {expected} parameter(s), got {got}")
        self.name = name
        self.expected = expected
        self.got = got


class ParameterTypeError(WorkshopDbError, ValueError):
    """Textual parameter could not be coerced to the template's declared type."""

    pass


class ExecutionError(WorkshopDbError):
    """Query failed against an open handle (malformed query, closed connection, engine error)."""

    pass


class QueryTimeoutError(ExecutionError):
    """Waiting for a submitted query exceeded its timeout; its continuation is suppressed."""

    pass


class UsageError(WorkshopDbError):
    """Operation invoked on a facade that is not open (closed or failed to open)."""

    pass


__all__ = [
    "ArityError",
    "ConfigurationError",
    "ExecutionError",
    "InitializationError",
    "OperationNotFoundError",
    "ParameterTypeError",
    "QueryTimeoutError",
    "StoreIOError",
    "UsageError",
    "WorkshopDbError",
]
