# tests/test_models_and_dates.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bloom.garden.dates import local_date_key
from bloom.garden.models import Flower, FlowerType, Task, TaskStatus, parse_timestamp, utc_timestamp

UTC_MINUS_5 = timezone(timedelta(hours=-5))
UTC_PLUS_9 = timezone(timedelta(hours=9))


def test_date_key_uses_local_calendar_not_utc() -> None:
    # 23:30 local in UTC-5 is already the next day in UTC.
    instant = datetime(2024, 5, 2, 4, 30, tzinfo=timezone.utc)
    assert local_date_key(instant, tz=UTC_MINUS_5) == "2024-05-01"
    assert local_date_key(instant, tz=timezone.utc) == "2024-05-02"


def test_date_key_positive_offset() -> None:
    instant = datetime(2024, 4, 30, 16, 0, tzinfo=timezone.utc)
    assert local_date_key(instant, tz=UTC_PLUS_9) == "2024-05-01"


def test_date_key_naive_is_taken_as_local() -> None:
    assert local_date_key(datetime(2024, 5, 1, 23, 59)) == "2024-05-01"


def test_date_key_format() -> None:
    key = local_date_key()
    assert len(key) == 10 and key[4] == "-" and key[7] == "-"


def test_timestamp_format_and_parse() -> None:
    dt = datetime(2024, 5, 1, 9, 15, 2, 120000, tzinfo=timezone.utc)
    s = utc_timestamp(dt)
    assert s == "2024-05-01T09:15:02.120Z"
    assert parse_timestamp(s) == dt
    assert parse_timestamp("garbage") is None
    assert parse_timestamp(None) is None


def test_task_completed_is_one_way() -> None:
    task = Task(id="t", title="Stretch", difficulty=1, date_iso="2024-05-01")
    done = task.completed("2024-05-01T09:00:00.000Z")
    assert done.status is TaskStatus.COMPLETED
    assert done.completed("2024-05-01T10:00:00.000Z") is done
    assert task.status is TaskStatus.PENDING


@pytest.mark.parametrize("difficulty", [0, 4])
def test_task_rejects_bad_difficulty(difficulty: int) -> None:
    with pytest.raises(ValueError):
        Task(id="t", title="x", difficulty=difficulty, date_iso="2024-05-01")


def test_task_from_dict_rejects_completed_without_timestamp() -> None:
    raw = Task(id="t", title="x", difficulty=1, date_iso="2024-05-01").to_dict()
    raw["status"] = "completed"
    with pytest.raises(ValueError):
        Task.from_dict(raw)


def test_pending_task_drops_stray_completed_at() -> None:
    raw = {"id": "t", "title": "x", "difficulty": 2, "dateISO": "2024-05-01", "status": "pending", "completedAt": "2024-05-01T09:00:00.000Z"}
    assert Task.from_dict(raw).completed_at is None


def test_flower_from_dict_rejects_bool_coordinates() -> None:
    raw = {"id": "f", "dateISO": "2024-05-01", "taskId": "t", "type": "Rose", "x": True, "y": 0, "createdAt": "2024-05-01T09:00:00.000Z"}
    with pytest.raises(ValueError):
        Flower.from_dict(raw)


def test_task_from_dict_rejects_empty_completed_at() -> None:
    raw = {"id": "t", "title": "x", "difficulty": 1, "dateISO": "2024-05-01", "status": "completed", "completedAt": ""}
    with pytest.raises(ValueError):
        Task.from_dict(raw)


@pytest.mark.parametrize("difficulty", [2.0, True])
def test_task_rejects_non_int_difficulty(difficulty) -> None:
    with pytest.raises(ValueError):
        Task(id="t", title="x", difficulty=difficulty, date_iso="2024-05-01")


def test_flower_rejects_float_coordinates() -> None:
    with pytest.raises(ValueError):
        Flower(id="f", date_iso="2024-05-01", task_id="t", type=FlowerType.ROSE, x=1.0, y=0, created_at="2024-05-01T09:00:00.000Z")
