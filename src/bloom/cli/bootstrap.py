# src/bloom/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the key-value backend,
- resolves the active day once and loads its slice into AppState.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import get_settings
from ..core.ports import KeyValueBackend
from ..core.state import AppState
from ..garden.backends import JsonFileKeyValueStore, SqliteKeyValueStore
from ..garden.dates import local_date_key
from ..garden.day import DayState
from ..garden.store import DEFAULT_STORAGE_KEY, SnapshotStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.blob_dir.mkdir(parents=True, exist_ok=True)


def create_backend(settings) -> tuple[KeyValueBackend, str]:
    """Return (backend, human-readable label) for settings.storage_backend."""
    kind = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if kind == "file":
        return JsonFileKeyValueStore(settings.blob_dir), f"file:{settings.blob_dir}"
    if kind != "sqlite":
        logger.warning("Unknown storage backend %r, using sqlite.", kind)
    return SqliteKeyValueStore(settings.db_path), f"sqlite:{settings.db_path}"


def create_initial_state(
    *,
    settings=None,
    backend: KeyValueBackend | None = None,
    now: datetime | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and backend injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings(). `now` pins the active day.
    """
    if settings is None:
        settings = get_settings()

    if backend is None:
        _ensure_local_dirs(settings)
        backend, label = create_backend(settings)
    else:
        label = type(backend).__name__

    store = SnapshotStore(backend, key=getattr(settings, "storage_key", DEFAULT_STORAGE_KEY))
    date_key = local_date_key(now)
    day = DayState.load(store, date_key)

    return AppState(settings=settings, store=store, day=day, storage_label=label)
