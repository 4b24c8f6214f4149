# src/bloom/garden/store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..core.ports import KeyValueBackend
from .models import Flower, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "bloom:v1"

TASKS_FIELD = "tasksByDate"
FLOWERS_FIELD = "flowersByDate"

RawRecords = list[Any]


@dataclass(slots=True)
class Snapshot:
    """
    Full persisted state across all date-keys.

    Records are kept as the raw JSON values that were read, so dates other
    than the one being saved are written back exactly as they were loaded.
    """

    tasks_by_date: dict[str, RawRecords] = field(default_factory=dict)
    flowers_by_date: dict[str, RawRecords] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.tasks_by_date and not self.flowers_by_date

    def dates(self) -> list[str]:
        return sorted(set(self.tasks_by_date) | set(self.flowers_by_date))

    def tasks_for(self, date_key: str) -> list[Task]:
        return _parse_records(self.tasks_by_date.get(date_key), Task.from_dict, "task", date_key)

    def flowers_for(self, date_key: str) -> list[Flower]:
        return _parse_records(self.flowers_by_date.get(date_key), Flower.from_dict, "flower", date_key)

    def with_day(self, date_key: str, tasks: Iterable[Task], flowers: Iterable[Flower]) -> Snapshot:
        """Copy of this snapshot with only `date_key` replaced in both maps."""
        tasks_by_date = dict(self.tasks_by_date)
        flowers_by_date = dict(self.flowers_by_date)
        tasks_by_date[date_key] = [t.to_dict() for t in tasks]
        flowers_by_date[date_key] = [f.to_dict() for f in flowers]
        return Snapshot(tasks_by_date=tasks_by_date, flowers_by_date=flowers_by_date)

    def to_dict(self) -> dict[str, Any]:
        return {TASKS_FIELD: self.tasks_by_date, FLOWERS_FIELD: self.flowers_by_date}

    @classmethod
    def from_dict(cls, data: Any) -> Snapshot:
        """Raises ValueError when the top-level shape is wrong."""
        if not isinstance(data, dict):
            raise ValueError("snapshot must be a JSON object")
        tasks = data.get(TASKS_FIELD, {})
        flowers = data.get(FLOWERS_FIELD, {})
        if not isinstance(tasks, dict) or not isinstance(flowers, dict):
            raise ValueError(f"{TASKS_FIELD} and {FLOWERS_FIELD} must be JSON objects")
        return cls(tasks_by_date=dict(tasks), flowers_by_date=dict(flowers))


def _parse_records(records: Any, parse, kind: str, date_key: str) -> list:
    if records is None:
        return []
    if not isinstance(records, list):
        logger.warning("Ignoring %s entry for %s: expected a list, got %s", kind, date_key, type(records).__name__)
        return []
    out = []
    for raw in records:
        if not isinstance(raw, dict):
            logger.warning("Skipping malformed %s record for %s: %r", kind, date_key, raw)
            continue
        try:
            out.append(parse(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping invalid %s record for %s: %s", kind, date_key, e)
    return out


def encode_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(snapshot.to_dict(), ensure_ascii=False, separators=(",", ":"))


class SnapshotStore:
    """
    Repository for the single serialized snapshot blob.

    The blob lives under one fixed key of a KeyValueBackend. Saving a day
    always reloads the blob first and replaces only that day's entries, so a
    session holding one day in memory never destroys the other days.
    """

    def __init__(self, backend: KeyValueBackend, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Snapshot:
        """Never raises: missing, unreadable or malformed blobs load as empty."""
        try:
            raw = self._backend.get(self._key)
        except Exception:
            logger.exception("Failed to read snapshot key=%s; starting empty.", self._key)
            return Snapshot()

        if not raw:
            return Snapshot()

        try:
            return Snapshot.from_dict(json.loads(raw))
        except (ValueError, TypeError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; absurdly nested blobs raise RecursionError.
            logger.warning("Discarding unreadable snapshot key=%s: %s", self._key, e)
            return Snapshot()

    def save(self, snapshot: Snapshot) -> None:
        """Replace the whole blob. Prefer save_day() from partial views."""
        self._backend.set(self._key, encode_snapshot(snapshot))

    def save_day(self, date_key: str, tasks: Iterable[Task], flowers: Iterable[Flower]) -> Snapshot:
        merged = self.load().with_day(date_key, tasks, flowers)
        self.save(merged)
        logger.debug(
            "Saved day=%s tasks=%d flowers=%d (dates stored=%d)",
            date_key,
            len(merged.tasks_by_date[date_key]),
            len(merged.flowers_by_date[date_key]),
            len(merged.dates()),
        )
        return merged
