# src/bloom/garden/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

GRID_COLUMNS = 6
GRID_ROWS = 4

DIFFICULTIES = (1, 2, 3)


class TaskStatus(StrEnum):
    """Task lifecycle status. The only transition is pending -> completed."""

    PENDING = "pending"
    COMPLETED = "completed"


class FlowerType(StrEnum):
    DAISY = "Daisy"
    TULIP = "Tulip"
    ROSE = "Rose"


def new_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp(dt: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    if dt is None:
        dt = datetime.now(timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _require_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} must be a non-empty string")
    return value


def _require_int(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    # bool is an int subclass; a stored true/false is not a coordinate.
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    return value


@dataclass(frozen=True, slots=True)
class Task:
    """
    One daily task.

    Records are immutable; completion produces a new Task via `completed()`.
    Field names on the wire follow the persisted layout (camelCase).
    """

    id: str
    title: str
    difficulty: int
    date_iso: str
    status: TaskStatus = TaskStatus.PENDING
    completed_at: str | None = None

    def __post_init__(self) -> None:
        # Exact int only: 2.0 or True would persist but fail to load back.
        if type(self.difficulty) is not int or self.difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {DIFFICULTIES}, got {self.difficulty!r}")
        if not self.title.strip():
            raise ValueError("title is required")

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    def completed(self, completed_at: str) -> Task:
        if self.is_completed:
            return self
        return Task(
            id=self.id,
            title=self.title,
            difficulty=self.difficulty,
            date_iso=self.date_iso,
            status=TaskStatus.COMPLETED,
            completed_at=completed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "difficulty": self.difficulty,
            "dateISO": self.date_iso,
            "status": self.status.value,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        status_raw = raw.get("status", TaskStatus.PENDING.value)
        try:
            status = TaskStatus(status_raw)
        except ValueError:
            raise ValueError(f"unknown task status {status_raw!r}") from None

        completed_at: str | None = None
        if status is TaskStatus.COMPLETED:
            completed_at = _require_str(raw, "completedAt")

        return cls(
            id=_require_str(raw, "id"),
            title=_require_str(raw, "title").strip(),
            difficulty=_require_int(raw, "difficulty"),
            date_iso=_require_str(raw, "dateISO"),
            status=status,
            completed_at=completed_at,
        )


@dataclass(frozen=True, slots=True)
class Flower:
    id: str
    date_iso: str
    task_id: str
    type: FlowerType
    x: int
    y: int
    created_at: str

    def __post_init__(self) -> None:
        if type(self.x) is not int or type(self.y) is not int:
            raise ValueError(f"plot coordinates must be integers, got ({self.x!r}, {self.y!r})")
        if not (0 <= self.x < GRID_COLUMNS and 0 <= self.y < GRID_ROWS):
            raise ValueError(f"plot ({self.x}, {self.y}) is outside the {GRID_COLUMNS}x{GRID_ROWS} grid")

    @property
    def plot(self) -> tuple[int, int]:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "dateISO": self.date_iso,
            "taskId": self.task_id,
            "type": self.type.value,
            "x": self.x,
            "y": self.y,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Flower:
        type_raw = raw.get("type")
        try:
            flower_type = FlowerType(type_raw)
        except ValueError:
            raise ValueError(f"unknown flower type {type_raw!r}") from None

        return cls(
            id=_require_str(raw, "id"),
            date_iso=_require_str(raw, "dateISO"),
            task_id=_require_str(raw, "taskId"),
            type=flower_type,
            x=_require_int(raw, "x"),
            y=_require_int(raw, "y"),
            created_at=_require_str(raw, "createdAt"),
        )
