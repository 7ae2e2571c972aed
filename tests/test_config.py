"""Config: defaults <- YAML (WORKSHOP_DB_CONFIG) <- WORKSHOP_DB_* env."""

from __future__ import annotations

import pytest

from workshop_db import config
from workshop_db.core.errors import ConfigurationError
from workshop_db.fixtures import WORKSHOPS_SQL, workshops_script


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for var in ("WORKSHOP_DB_MODE", "WORKSHOP_DB_PATH", "WORKSHOP_DB_SCRIPT", "WORKSHOP_DB_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    # point at a file that does not exist so a developer's config.yaml never leaks in
    monkeypatch.setenv("WORKSHOP_DB_CONFIG", str(tmp_path / "none.yaml"))


def test_defaults():
    assert config.store_mode() == "file"
    assert config.store_path() == "data/workshops.sqlite"
    assert config.store_script() is None
    assert config.query_timeout_s() == 5.0
    assert config.api_port() == 8000


def test_yaml_overrides_defaults(monkeypatch, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("store:\n  mode: memory\nquery:\n  timeout_s: 0\n", encoding="utf-8")
    monkeypatch.setenv("WORKSHOP_DB_CONFIG", str(cfg))
    assert config.store_mode() == "memory"
    assert config.store_path() == "data/workshops.sqlite"
    assert config.query_timeout_s() is None


def test_env_overrides_yaml(monkeypatch, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("store:\n  mode: memory\n", encoding="utf-8")
    monkeypatch.setenv("WORKSHOP_DB_CONFIG", str(cfg))
    monkeypatch.setenv("WORKSHOP_DB_MODE", "FILE")
    monkeypatch.setenv("WORKSHOP_DB_PATH", "/tmp/other.sqlite")
    monkeypatch.setenv("WORKSHOP_DB_TIMEOUT", "1.5")
    assert config.store_mode() == "file"
    assert config.store_path() == "/tmp/other.sqlite"
    assert config.query_timeout_s() == 1.5


def test_invalid_yaml_is_configuration_error(monkeypatch, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("store: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("WORKSHOP_DB_CONFIG", str(cfg))
    with pytest.raises(ConfigurationError):
        config.get_config()


def test_bad_timeout_is_configuration_error(monkeypatch):
    monkeypatch.setenv("WORKSHOP_DB_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        config.query_timeout_s()


def test_store_source_per_mode(monkeypatch):
    assert config.store_source() == ("file", "data/workshops.sqlite")
    monkeypatch.setenv("WORKSHOP_DB_MODE", "memory")
    assert config.store_source() == ("memory", str(WORKSHOPS_SQL))
    monkeypatch.setenv("WORKSHOP_DB_MODE", "direct")
    assert config.store_source() == ("direct", workshops_script())
    monkeypatch.setenv("WORKSHOP_DB_MODE", "ftp")
    with pytest.raises(ConfigurationError):
        config.store_source()


def test_database_from_config(monkeypatch):
    from workshop_db import Database

    monkeypatch.setenv("WORKSHOP_DB_MODE", "direct")
    with Database.from_config() as db:
        assert [r["workshopId"] for r in db.query("get_all")] == [1, 2]


@pytest.mark.parametrize("body", ["store: null\n", "query: 5\n", "api: [1, 2]\n"])
def test_non_mapping_section_is_configuration_error(monkeypatch, tmp_path, body):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(body, encoding="utf-8")
    monkeypatch.setenv("WORKSHOP_DB_CONFIG", str(cfg))
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        config.get_config()
    with pytest.raises(ConfigurationError):
        config.store_mode()
