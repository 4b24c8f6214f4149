# src/bloom/garden/plots.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import GRID_COLUMNS, GRID_ROWS, Flower


def iter_plots() -> Iterator[tuple[int, int]]:
    """Every (x, y) of the grid in row-major order."""
    for y in range(GRID_ROWS):
        for x in range(GRID_COLUMNS):
            yield (x, y)


def occupancy(flowers: Iterable[Flower]) -> dict[tuple[int, int], Flower]:
    return {f.plot: f for f in flowers}


def allocate(flowers: Iterable[Flower]) -> tuple[int, int] | None:
    """
    First free plot scanning row 0 left to right, then row 1, ...

    Returns None when all GRID_COLUMNS * GRID_ROWS plots are taken.
    """
    taken = {f.plot for f in flowers}
    for plot in iter_plots():
        if plot not in taken:
            return plot
    return None
