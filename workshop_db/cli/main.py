"""
Top-level CLI dispatcher: workshop-db <command> [args...].
All commands dispatch to package CLI modules.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

_COMMANDS = {
    "query": "Run a named operation and print its rows",
    "list": "List operations and their parameters",
    "init": "Build a store file from a setup script",
    "serve": "Serve the HTTP API (uvicorn)",
}


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="workshop-db",
        description="Workshop data-access layer CLI",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    subparsers = parser.add_subparsers(dest="command", help="command")
    for name, help_text in _COMMANDS.items():
        subparsers.add_parser(name, help=help_text, add_help=False)

    args, rest = parser.parse_known_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    _configure_logging(args.verbose)

    cmd = args.command
    if cmd == "query":
        from workshop_db.cli import query as mod

        return mod.main(rest)
    if cmd == "list":
        from workshop_db.cli import query as mod

        return mod.main_list(rest)
    if cmd == "init":
        from workshop_db.cli import init_db as mod

        return mod.main(rest)
    if cmd == "serve":
        from workshop_db.cli import serve as mod

        return mod.main(rest)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
