"""Packaged setup scripts. workshops.sql defines the Workshop table and its sample rows."""

from __future__ import annotations

from pathlib import Path

FIXTURE_DIR = Path(__file__).resolve().parent
WORKSHOPS_SQL = FIXTURE_DIR / "workshops.sql"


def workshops_script() -> str:
    return WORKSHOPS_SQL.read_text(encoding="utf-8")
