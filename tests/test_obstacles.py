# tests/test_obstacles.py

from __future__ import annotations

import random

import pytest

from gridsearch.grid import CellStatus, Grid
from gridsearch.obstacles import free_positions, scatter_obstacles


def fresh_grid() -> Grid:
    grid = Grid(6)
    grid.set_start((0, 0))
    grid.set_goal((5, 5))
    return grid


def test_same_seed_same_layout() -> None:
    a = scatter_obstacles(fresh_grid(), 12, random.Random(42))
    b = scatter_obstacles(fresh_grid(), 12, random.Random(42))
    assert a == b


def test_obstacles_avoid_endpoints_and_are_distinct() -> None:
    grid = fresh_grid()
    placed = scatter_obstacles(grid, 34, random.Random(1))

    assert len(set(placed)) == 34
    assert (0, 0) not in placed and (5, 5) not in placed
    assert grid.cell((0, 0)).status is CellStatus.START
    assert sorted(grid.obstacles()) == sorted(placed)
    assert free_positions(grid) == []


def test_existing_obstacles_are_not_reused() -> None:
    grid = fresh_grid()
    grid.set_obstacle((2, 2))
    placed = scatter_obstacles(grid, 5, random.Random(9))
    assert (2, 2) not in placed
    assert len(grid.obstacles()) == 6


@pytest.mark.parametrize("count", [-1, 35])
def test_bad_counts_rejected(count: int) -> None:
    grid = fresh_grid()
    with pytest.raises(ValueError):
        scatter_obstacles(grid, count, random.Random(0))
    assert grid.obstacles() == []
