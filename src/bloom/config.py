# src/bloom/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every field has a local default.
- Components take settings as an argument, so tests never touch the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "BLOOM"

STORAGE_BACKENDS = ("sqlite", "file")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


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

    # ---- Storage ----
    storage_backend: str
    storage_key: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path
    blob_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "bloom").strip() or "bloom"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        storage_backend = _env_choice(_k("STORAGE_BACKEND"), STORAGE_BACKENDS, "sqlite")
        storage_key = _env(_k("STORAGE_KEY"), "bloom:v1").strip() or "bloom:v1"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/bloom"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "bloom.sqlite3")
        blob_dir = _env_path(_k("BLOB_DIR"), data_dir / "blobs")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            storage_backend=storage_backend,
            storage_key=storage_key,
            data_dir=data_dir,
            db_path=db_path,
            blob_dir=blob_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
