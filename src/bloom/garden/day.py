# src/bloom/garden/day.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .models import Flower, Task, TaskStatus, new_id, utc_timestamp
from .plots import allocate, occupancy
from .rewards import flower_for_difficulty
from .store import SnapshotStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DayState:
    """
    In-memory tasks and flowers for the active day.

    The active day is fixed at construction; a session that runs past
    midnight keeps working on the day it started with.

    Every mutation is followed by one reload-merge-write of the active day
    through the SnapshotStore. Failed writes are logged and the in-memory
    state is kept.
    """

    def __init__(
        self,
        store: SnapshotStore,
        date_key: str,
        *,
        clock: Clock = _utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._store = store
        self._date_key = date_key
        self._clock = clock
        self._new_id = id_factory

        self._tasks: list[Task] = []
        self._flowers: list[Flower] = []
        self._selected_flower_id: str | None = None

    @classmethod
    def load(cls, store: SnapshotStore, date_key: str, **kwargs) -> DayState:
        day = cls(store, date_key, **kwargs)
        snapshot = store.load()
        day._tasks = snapshot.tasks_for(date_key)
        day._flowers = snapshot.flowers_for(date_key)
        logger.info("Loaded %d tasks, %d flowers for %s", len(day._tasks), len(day._flowers), date_key)
        return day

    # ---- read API ----

    @property
    def date_key(self) -> str:
        return self._date_key

    @property
    def tasks(self) -> list[Task]:
        """Most recent first."""
        return list(self._tasks)

    @property
    def flowers(self) -> list[Flower]:
        return list(self._flowers)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def flower_for_task(self, task_id: str) -> Flower | None:
        for f in self._flowers:
            if f.task_id == task_id:
                return f
        return None

    def flower_at(self, x: int, y: int) -> Flower | None:
        return occupancy(self._flowers).get((x, y))

    # ---- selection (derived, never persisted) ----

    @property
    def selected_flower(self) -> Flower | None:
        if self._selected_flower_id is None:
            return None
        for f in self._flowers:
            if f.id == self._selected_flower_id:
                return f
        return None

    @property
    def selected_task(self) -> Task | None:
        flower = self.selected_flower
        return self.get_task(flower.task_id) if flower else None

    def select_flower(self, flower_id: str | None) -> Flower | None:
        if flower_id is not None and not any(f.id == flower_id for f in self._flowers):
            flower_id = None
        self._selected_flower_id = flower_id
        return self.selected_flower

    # ---- mutations ----

    def add_task(self, title: str, difficulty: int = 1) -> Task | None:
        trimmed = (title or "").strip()
        if not trimmed:
            return None

        task = Task(
            id=self._new_id(),
            title=trimmed,
            difficulty=difficulty,
            date_iso=self._date_key,
        )
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s difficulty=%s day=%s", task.id, difficulty, self._date_key)
        self._persist()
        return task

    def complete_task(self, task_id: str) -> Flower | None:
        """
        Mark a pending task completed and try to plant its flower.

        Returns the planted flower, or None when nothing was planted (unknown
        task, already completed, already planted, or the grid is full).
        """
        idx = next((i for i, t in enumerate(self._tasks) if t.id == task_id), None)
        if idx is None:
            return None
        task = self._tasks[idx]
        if task.status is TaskStatus.COMPLETED:
            return None

        completed_at = utc_timestamp(self._clock())
        task = task.completed(completed_at)
        self._tasks[idx] = task

        flower = self._plant(task, completed_at)
        self._persist()
        return flower

    def reset_day(self) -> None:
        self._tasks = [t for t in self._tasks if t.date_iso != self._date_key]
        self._flowers = [f for f in self._flowers if f.date_iso != self._date_key]
        self._selected_flower_id = None
        logger.info("Day reset: %s", self._date_key)
        self._persist()

    # ---- internals ----

    def _plant(self, task: Task, planted_at: str) -> Flower | None:
        if self.flower_for_task(task.id) is not None:
            return None

        todays = [f for f in self._flowers if f.date_iso == self._date_key]
        plot = allocate(todays)
        if plot is None:
            # Grid full: the completion stands, the reward is forgone.
            logger.info("No free plot for task id=%s on %s; no flower planted.", task.id, self._date_key)
            return None

        x, y = plot
        flower = Flower(
            id=self._new_id(),
            date_iso=self._date_key,
            task_id=task.id,
            type=flower_for_difficulty(task.difficulty),
            x=x,
            y=y,
            created_at=planted_at,
        )
        self._flowers.append(flower)
        logger.debug("Flower planted id=%s type=%s plot=(%d,%d)", flower.id, flower.type, x, y)
        return flower

    def _persist(self) -> None:
        try:
            self._store.save_day(self._date_key, self._tasks, self._flowers)
        except Exception:
            logger.exception("Failed to save day=%s", self._date_key)
