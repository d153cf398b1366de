# src/routine_helper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Only the CLI layer reads settings; the engines take everything as arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "ROUTINE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    snapshot_path: Path
    save_snapshot: bool

    # ---- Defaults for new entities ----
    default_target_days: int

    # ---- Clock ----
    today_override: str | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "routine-helper").strip() or "routine-helper"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/routine"))
        snapshot_path = _env_path(_k("SNAPSHOT_PATH"), data_dir / "snapshot.json")
        save_snapshot = _env_bool(_k("SAVE_SNAPSHOT"), True)

        default_target_days = _env_int(_k("DEFAULT_TARGET_DAYS"), 30)
        if default_target_days < 1:
            default_target_days = 30

        today_override = _env(_k("TODAY"), "").strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            snapshot_path=snapshot_path,
            save_snapshot=save_snapshot,
            default_target_days=default_target_days,
            today_override=today_override,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
