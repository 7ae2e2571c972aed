"""
Load config from config.yaml with optional env overrides.
Single source of truth for store mode/path, setup script, query timeout, and API bind address.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .core.errors import ConfigurationError

# Defaults if no YAML or env
_DEFAULTS = {
    "store": {
        "mode": "file",
        "path": "data/workshops.sqlite",
        "script": None,
        "busy_timeout_ms": 5000,
    },
    "query": {"timeout_s": 5.0},
    "api": {"host": "127.0.0.1", "port": 8000},
}


def _config_yaml_path() -> Path:
    """WORKSHOP_DB_CONFIG if set; else config.yaml at repo root (parent of package dir)."""
    explicit = os.environ.get("WORKSHOP_DB_CONFIG")
    if explicit:
        return Path(explicit)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    config_path = _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    mode = os.environ.get("WORKSHOP_DB_MODE")
    if mode:
        overrides.setdefault("store", {})["mode"] = mode
    path = os.environ.get("WORKSHOP_DB_PATH")
    if path:
        overrides.setdefault("store", {})["path"] = path
    script = os.environ.get("WORKSHOP_DB_SCRIPT")
    if script:
        overrides.setdefault("store", {})["script"] = script
    timeout = os.environ.get("WORKSHOP_DB_TIMEOUT")
    if timeout:
        overrides.setdefault("query", {})["timeout_s"] = timeout
    return overrides


def get_config() -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml())
    for section in _DEFAULTS:
        if not isinstance(merged.get(section), dict):
            raise ConfigurationError(
                f"Config section '{section}' must be a mapping, got {type(merged.get(section)).__name__}"
            )
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors
def store_mode() -> str:
    return str(get_config()["store"]["mode"]).strip().lower()


def store_path() -> str:
    return str(get_config()["store"]["path"])


def store_script() -> Optional[str]:
    script = get_config()["store"].get("script")
    return str(script) if script else None


def busy_timeout_ms() -> int:
    value = get_config()["store"].get("busy_timeout_ms", _DEFAULTS["store"]["busy_timeout_ms"])
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        raise ConfigurationError(f"store.busy_timeout_ms must be an integer, got {value!r}") from None


def query_timeout_s() -> Optional[float]:
    """Seconds to wait for a query; 0 or negative disables the timeout."""
    value = get_config()["query"].get("timeout_s")
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"query.timeout_s must be a number, got {value!r}") from None
    return seconds if seconds > 0 else None


def api_host() -> str:
    return str(get_config()["api"]["host"])


def api_port() -> int:
    value = get_config()["api"]["port"]
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"api.port must be an integer, got {value!r}") from None


def store_source() -> Tuple[str, str]:
    """
    (mode, argument) for Database(): file -> store path, memory -> script path,
    direct -> script text read from the script path. Missing script falls back to the
    packaged fixture.
    """
    from .fixtures import WORKSHOPS_SQL

    mode = store_mode()
    if mode == "file":
        return mode, store_path()
    if mode == "memory":
        return mode, store_script() or str(WORKSHOPS_SQL)
    if mode == "direct":
        from .store.modes import read_script

        return mode, read_script(store_script() or WORKSHOPS_SQL)
    raise ConfigurationError(f"Unknown acquisition mode {mode!r} in config (store.mode)")
