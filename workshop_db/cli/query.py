"""
Run one named operation and print its rows.
Use: workshop-db query <operation> [params...] [--mode MODE] [--source PATH] [--json]
     workshop-db list
Without --mode the store comes from config.yaml / WORKSHOP_DB_* env.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from workshop_db.core.errors import WorkshopDbError
from workshop_db.database import Database
from workshop_db.formatting import render_json, render_table
from workshop_db.queries import DEFAULT_REGISTRY
from workshop_db.store.modes import AcquisitionMode


def open_database(mode: Optional[str], source: Optional[str]) -> Database:
    from workshop_db import config
    from workshop_db.fixtures import WORKSHOPS_SQL
    from workshop_db.store.engine import SQLiteEngine
    from workshop_db.store.modes import read_script

    if mode is None:
        return Database.from_config()
    engine = SQLiteEngine(busy_timeout_ms=config.busy_timeout_ms())
    acq = AcquisitionMode.parse(mode)
    if acq is AcquisitionMode.FILE:
        return Database(acq, source or config.store_path(), engine=engine)
    script_path = source or str(WORKSHOPS_SQL)
    if acq is AcquisitionMode.MEMORY:
        return Database(acq, script_path, engine=engine)
    return Database(acq, read_script(script_path), engine=engine)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(
        prog="workshop-db query",
        description="Run a named operation against the configured (or given) store.",
    )
    ap.add_argument("operation", help=f"one of: {', '.join(DEFAULT_REGISTRY.names())}")
    ap.add_argument("params", nargs="*", help="positional parameters for the operation")
    ap.add_argument(
        "--mode",
        choices=[m.value for m in AcquisitionMode],
        default=None,
        help="store acquisition mode (default: store.mode from config)",
    )
    ap.add_argument(
        "--source",
        default=None,
        help="file mode: store path; memory/direct: setup script path (default: packaged fixture)",
    )
    ap.add_argument("--json", action="store_true", help="print rows as JSON instead of a table")
    ap.add_argument("--timeout", type=float, default=None, help="seconds to wait (default: query.timeout_s)")
    args = ap.parse_args(argv)

    try:
        template = DEFAULT_REGISTRY.lookup(args.operation)
        params = template.coerce(args.params)
        timeout = args.timeout
        if timeout is None:
            from workshop_db.config import query_timeout_s

            timeout = query_timeout_s()

        def show(rows):
            print(render_json(rows) if args.json else render_table(rows, template.fields))

        with open_database(args.mode, args.source) as db:
            db.call(template.name, params, show).result(timeout=timeout)
        return 0
    except WorkshopDbError as e:
        print(f"query failed: {e}", file=sys.stderr)
        return 1


def main_list(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(prog="workshop-db list", description="List operations and their parameters.")
    ap.parse_args(argv)
    for template in DEFAULT_REGISTRY:
        print(f"{template.signature():<28} {template.description}")
    return 0
