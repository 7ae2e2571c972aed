"""
Build a local SQLite store file from a setup script so file mode has something to open.
Use: workshop-db init [--db PATH] [--script PATH]
Default DB path: store.path from config; default script: the packaged workshops fixture.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from workshop_db.core.errors import WorkshopDbError


def main(argv: Optional[List[str]] = None) -> int:
    from workshop_db import config
    from workshop_db.fixtures import WORKSHOPS_SQL
    from workshop_db.store.modes import read_script
    from workshop_db.store.sqlite_session import build_store_file

    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(
        prog="workshop-db init",
        description="Create (or rebuild) a store file by running a setup script against it.",
    )
    ap.add_argument("--db", default=None, help="DB path (default: store.path from config)")
    ap.add_argument("--script", default=None, help="setup script (default: packaged workshops.sql)")
    args = ap.parse_args(argv)
    try:
        db_path = args.db or config.store_path()
        script = read_script(args.script or WORKSHOPS_SQL)
        path = build_store_file(db_path, script)
    except WorkshopDbError as e:
        print(f"init failed: {e}", file=sys.stderr)
        return 1
    print(f"Initialized DB: {path}")
    return 0
