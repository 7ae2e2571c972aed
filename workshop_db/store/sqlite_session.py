"""
SQLite connection lifecycle for store files: context manager with guaranteed close.
Used to build File-mode stores from a setup script (workshop-db init, test fixtures).
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union

from ..core.errors import InitializationError

logger = logging.getLogger(__name__)


@contextmanager
def sqlite_conn(db_path: Union[str, Path]) -> Generator[sqlite3.Connection, None, None]:
    """
    Yield a SQLite connection that is always closed on exit.
    Enables PRAGMA foreign_keys=ON at open. Creates the file if missing.
    """
    path = str(Path(db_path).resolve())
    conn = sqlite3.connect(path)
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        conn.commit()
        yield conn
    finally:
        conn.close()


def build_store_file(db_path: Union[str, Path], script: str) -> Path:
    """
    Run a setup script against db_path (created if missing, parent dirs included).
    The script is expected to drop and recreate its tables, so rebuilding is safe.
    """
    path = Path(db_path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite_conn(path) as conn:
        try:
            conn.executescript(script)
            conn.commit()
        except (sqlite3.Error, ValueError) as e:
            raise InitializationError(f"Setup script failed for {path}: {e}") from e
    logger.info("Built store file %s", path)
    return path
