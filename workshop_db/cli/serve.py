"""
Launch the HTTP API over a store built from config (or --mode/--source).
Usage: workshop-db serve [--host 127.0.0.1] [--port 8000] [--mode MODE] [--source PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from workshop_db.core.errors import WorkshopDbError


def main(argv: Optional[List[str]] = None) -> int:
    import uvicorn

    from workshop_db import config
    from workshop_db.api import create_app
    from workshop_db.cli.query import open_database
    from workshop_db.store.modes import AcquisitionMode

    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(prog="workshop-db serve", description="Serve the workshop API")
    parser.add_argument("--host", default=None, help="Bind address (default: api.host from config)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: api.port from config)")
    parser.add_argument("--mode", choices=[m.value for m in AcquisitionMode], default=None)
    parser.add_argument("--source", default=None)
    args = parser.parse_args(argv)

    try:
        db = open_database(args.mode, args.source)
        host = args.host or config.api_host()
        port = args.port or config.api_port()
        timeout = config.query_timeout_s()
    except WorkshopDbError as e:
        print(f"serve failed: {e}", file=sys.stderr)
        return 1
    try:
        uvicorn.run(create_app(db, timeout=timeout), host=host, port=port)
    finally:
        db.close()
    return 0
