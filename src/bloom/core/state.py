# src/bloom/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..garden.day import DayState
from ..garden.store import SnapshotStore


@dataclass
class AppState:
    # Settings object (real Settings or a test namespace).
    settings: Any

    store: SnapshotStore
    day: DayState
    storage_label: str = "memory"
