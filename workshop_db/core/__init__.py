"""
Stable facade: shared error types only. No store, query, or cli imports.
Do not add exports without updating __all__.
"""

from __future__ import annotations

from .errors import (
    ArityError,
    ConfigurationError,
    ExecutionError,
    InitializationError,
    OperationNotFoundError,
    ParameterTypeError,
    QueryTimeoutError,
    StoreIOError,
    UsageError,
    WorkshopDbError,
)

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
