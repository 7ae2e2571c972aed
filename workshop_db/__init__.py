"""
Top-level public API surface. Stable facades only.
Canonical entrypoint: from workshop_db import Database. Does not import cli or api.
"""

from __future__ import annotations

from . import core, store
from ._version import __version__
from .channel import ResultChannel
from .core.errors import (
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
from .database import Database, DatabaseState, PendingQuery
from .executor import execute
from .queries import DEFAULT_REGISTRY, QueryRegistry, QueryTemplate
from .store import AcquisitionMode, SQLiteEngine, StoreHandle, resolve

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "AcquisitionMode",
    "ArityError",
    "ConfigurationError",
    "DEFAULT_REGISTRY",
    "Database",
    "DatabaseState",
    "ExecutionError",
    "InitializationError",
    "OperationNotFoundError",
    "ParameterTypeError",
    "PendingQuery",
    "QueryRegistry",
    "QueryTemplate",
    "QueryTimeoutError",
    "ResultChannel",
    "SQLiteEngine",
    "StoreHandle",
    "StoreIOError",
    "UsageError",
    "WorkshopDbError",
    "core",
    "execute",
    "resolve",
    "store",
]
