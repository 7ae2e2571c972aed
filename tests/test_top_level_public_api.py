"""Top-level package exports are stable and importable."""

from __future__ import annotations

import workshop_db


def test_all_exports_resolve():
    for name in workshop_db.__all__:
        assert hasattr(workshop_db, name), name


def test_version_string():
    assert isinstance(workshop_db.__version__, str)
    assert workshop_db.__version__.count(".") == 2

