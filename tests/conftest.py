# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from bloom.core.state import AppState
from bloom.garden.day import DayState
from bloom.garden.store import SnapshotStore

from .fakes import FakeClock, FakeKeyValueBackend, SequentialIds

DAY = "2024-05-01"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="bloom-test",
        log_level="DEBUG",
        storage_backend="sqlite",
        storage_key="bloom:v1",
        data_dir=tmp_path,
        db_path=tmp_path / "bloom.sqlite3",
        blob_dir=tmp_path / "blobs",
    )


@pytest.fixture()
def backend() -> FakeKeyValueBackend:
    return FakeKeyValueBackend()


@pytest.fixture()
def store(backend: FakeKeyValueBackend) -> SnapshotStore:
    return SnapshotStore(backend)


@pytest.fixture()
def day(store: SnapshotStore) -> DayState:
    """Empty DayState for 2024-05-01 with a fixed clock and readable ids."""
    return DayState.load(store, DAY, clock=FakeClock(), id_factory=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, store: SnapshotStore, day: DayState) -> AppState:
    return AppState(settings=settings, store=store, day=day, storage_label="fake")
