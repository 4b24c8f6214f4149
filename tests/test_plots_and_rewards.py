# tests/test_plots_and_rewards.py

from __future__ import annotations

import pytest

from bloom.garden.models import GRID_COLUMNS, GRID_ROWS, Flower, FlowerType
from bloom.garden.plots import allocate, iter_plots, occupancy
from bloom.garden.rewards import flower_for_difficulty


def _flower(x: int, y: int) -> Flower:
    return Flower(
        id=f"f-{x}-{y}",
        date_iso="2024-05-01",
        task_id=f"t-{x}-{y}",
        type=FlowerType.DAISY,
        x=x,
        y=y,
        created_at="2024-05-01T09:00:00.000Z",
    )


def test_empty_grid_allocates_origin() -> None:
    assert allocate([]) == (0, 0)


def test_allocation_fills_gaps_first() -> None:
    flowers = [_flower(0, 0), _flower(2, 0)]
    assert allocate(flowers) == (1, 0)


def test_allocation_wraps_to_next_row() -> None:
    flowers = [_flower(x, 0) for x in range(GRID_COLUMNS)]
    assert allocate(flowers) == (0, 1)


def test_full_grid_returns_none() -> None:
    flowers = [_flower(x, y) for x, y in iter_plots()]
    assert len(flowers) == GRID_COLUMNS * GRID_ROWS == 24
    assert allocate(flowers) is None


def test_iter_plots_is_row_major() -> None:
    plots = list(iter_plots())
    assert plots[:7] == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (5, 0), (0, 1)]
    assert plots[-1] == (5, 3)


def test_occupancy_joins_on_plot() -> None:
    f = _flower(4, 2)
    assert occupancy([f]) == {(4, 2): f}


def test_flower_outside_grid_is_rejected() -> None:
    with pytest.raises(ValueError):
        _flower(6, 0)
    with pytest.raises(ValueError):
        _flower(0, 4)


@pytest.mark.parametrize(
    ("difficulty", "expected"),
    [(1, FlowerType.DAISY), (2, FlowerType.TULIP), (3, FlowerType.ROSE)],
)
def test_reward_mapping(difficulty: int, expected: FlowerType) -> None:
    assert flower_for_difficulty(difficulty) is expected


@pytest.mark.parametrize("difficulty", [0, 4, -1])
def test_reward_mapping_rejects_out_of_range(difficulty: int) -> None:
    with pytest.raises(ValueError):
        flower_for_difficulty(difficulty)
