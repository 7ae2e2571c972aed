"""
Acquisition modes and the resolver that turns (mode, argument) into a StoreHandle.

direct: argument is setup script text, executed against a fresh in-memory store.
memory: argument is a path to a setup script file; read it, then behave as direct.
file:   argument is a path to an existing store file, opened as-is.
"""

from __future__ import annotations

import enum
import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union

from ..core.errors import ConfigurationError, InitializationError, StoreIOError
from .engine import SQLiteEngine, StoreHandle

logger = logging.getLogger(__name__)


class AcquisitionMode(str, enum.Enum):
    DIRECT = "direct"
    MEMORY = "memory"
    FILE = "file"

    @classmethod
    def parse(cls, value: Union[str, "AcquisitionMode"]) -> "AcquisitionMode":
        """Accept an AcquisitionMode or its name (case-insensitive). Unknown -> ConfigurationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown acquisition mode {value!r}. Available: {[m.value for m in cls]}"
            ) from None


def read_script(path: Union[str, Path]) -> str:
    """Full text of a setup script file. Unreadable -> StoreIOError."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StoreIOError(f"Cannot read setup script {path}: {e}", path=str(path)) from e


def _init_memory(engine: SQLiteEngine, script: str, label: str) -> StoreHandle:
    conn = engine.open_memory()
    try:
        engine.exec_script(conn, script)
    except (sqlite3.Error, ValueError) as e:
        engine.close(conn)
        raise InitializationError(f"Setup script failed for {label}: {e}") from e
    return StoreHandle(engine, conn, label=label)


def _open_file(engine: SQLiteEngine, path: Union[str, Path]) -> StoreHandle:
    p = Path(path)
    if not p.is_file():
        raise StoreIOError(f"Store file not found: {p}", path=str(p))
    try:
        conn = engine.open_file(p)
    except sqlite3.Error as e:
        raise StoreIOError(f"Cannot open store file {p}: {e}", path=str(p)) from e
    return StoreHandle(engine, conn, label=f"file:{p}")


def resolve(
    mode: Union[str, AcquisitionMode],
    argument: Union[str, Path],
    engine: Optional[SQLiteEngine] = None,
) -> StoreHandle:
    """
    Produce a live StoreHandle for the given mode and argument.
    Mode is validated before the engine is touched, so a bad mode never does I/O.
    """
    acq = AcquisitionMode.parse(mode)
    engine = engine if engine is not None else SQLiteEngine()

    if acq is AcquisitionMode.DIRECT:
        handle = _init_memory(engine, str(argument), label="direct:<script>")
    elif acq is AcquisitionMode.MEMORY:
        handle = _init_memory(engine, read_script(argument), label=f"memory:{argument}")
    else:
        handle = _open_file(engine, argument)

    logger.info("Opened store %s", handle.label)
    return handle
