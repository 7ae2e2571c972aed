"""
Store: engine, handle, acquisition modes. No query catalog or facade logic.
Only this package imports sqlite3 for live connections.
"""

from __future__ import annotations

from .engine import SQLiteEngine, StoreHandle
from .modes import AcquisitionMode, read_script, resolve
from .sqlite_session import build_store_file, sqlite_conn

__all__ = [
    "AcquisitionMode",
    "SQLiteEngine",
    "StoreHandle",
    "build_store_file",
    "read_script",
    "resolve",
    "sqlite_conn",
]
