"""
Store engine and handle: the only code that talks to sqlite3 directly.
The engine opens connections, runs setup scripts, and runs parameterized queries.
StoreHandle owns one live connection and does not know which acquisition mode produced it.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from ..core.errors import ExecutionError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class SQLiteEngine:
    """
    Store engine collaborator: open_file, open_memory, exec_script, run_query.
    Connections are opened with check_same_thread=False because each facade runs its
    queries on its own worker thread; the facade serializes access, not the engine.
    """

    def __init__(self, busy_timeout_ms: int = 5000) -> None:
        self.busy_timeout_ms = int(busy_timeout_ms)

    def open_file(self, path: Union[str, Path]) -> sqlite3.Connection:
        """Open an existing store read/write. mode=rw never creates a missing file."""
        uri = Path(path).resolve().as_uri() + "?mode=rw"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        try:
            conn.execute(f"PRAGMA busy_timeout={self.busy_timeout_ms};")
            # reads the header: a non-database file fails here, not on first query
            conn.execute("PRAGMA schema_version;").fetchone()
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def open_memory(self) -> sqlite3.Connection:
        return sqlite3.connect(":memory:", check_same_thread=False)

    def exec_script(self, conn: sqlite3.Connection, text: str) -> None:
        conn.executescript(text)

    def run_query(self, conn: sqlite3.Connection, sql: str, parameters: Sequence[Any]) -> List[Record]:
        """Bind parameters positionally and return rows as ordered name -> value dicts."""
        cur = conn.execute(sql, tuple(parameters))
        try:
            columns = [d[0] for d in (cur.description or ())]
            return [dict(zip(columns, row)) for row in cur.fetchall()]
        finally:
            cur.close()

    def close(self, conn: sqlite3.Connection) -> None:
        conn.close()


class StoreHandle:
    """Exclusively owned live connection. Closing is idempotent; queries after close fail."""

    def __init__(self, engine: SQLiteEngine, conn: Any, *, label: str = "") -> None:
        self._engine = engine
        self._conn = conn
        self._closed = False
        self.label = label

    @property
    def closed(self) -> bool:
        return self._closed

    def run_query(self, sql: str, parameters: Sequence[Any]) -> List[Record]:
        if self._closed:
            raise ExecutionError(f"Store handle {self.label or '<unnamed>'} is closed")
        return self._engine.run_query(self._conn, sql, parameters)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._engine.close(self._conn)
        logger.debug("Closed store handle %s", self.label)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"StoreHandle({self.label!r}, {state})"
