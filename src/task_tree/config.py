# src/task_tree/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
- Optional config_local.py for safe local overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTREE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Tree behaviour ----
    allow_duplicate_ids: bool
    description_max_len: int

    # ---- Persistence ----
    autosave: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tree") or "task-tree"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        allow_duplicate_ids = _env_bool(_k("ALLOW_DUPLICATE_IDS"), False)
        description_max_len = max(1, _env_int(_k("DESCRIPTION_MAX_LEN"), 20))

        autosave = _env_bool(_k("AUTOSAVE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_tree"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            allow_duplicate_ids=allow_duplicate_ids,
            description_max_len=description_max_len,
            autosave=autosave,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    # Keep it explicit: only these names are honoured.
    for _name, _attr in (
        ("CONSOLE_ENABLED", "console_enabled"),
        ("ALLOW_DUPLICATE_IDS", "allow_duplicate_ids"),
        ("AUTOSAVE", "autosave"),
    ):
        if hasattr(_config_local, _name):
            object.__setattr__(SETTINGS, _attr, bool(getattr(_config_local, _name)))  # type: ignore[misc]


def get_settings() -> Settings:
    return SETTINGS
