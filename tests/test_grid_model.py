# tests/test_grid_model.py
"""
Unit tests for the Grid model: initialization, authoring markers,
bounds validation and neighbor generation.
"""

from __future__ import annotations

import math

import pytest

from gridsearch.errors import InvalidPositionError
from gridsearch.grid import CellStatus, Grid, Position
from gridsearch.heuristics import euclidean


def test_initialize_all_empty_with_sentinel_priorities() -> None:
    grid = Grid(4)

    assert grid.start is None and grid.goal is None
    for x in range(4):
        for y in range(4):
            cell = grid.cell((x, y))
            assert cell.position == Position(x, y)
            assert cell.status is CellStatus.EMPTY
            assert not cell.in_open_set and not cell.closed
            assert grid.best_priority[Position(x, y)] == math.inf


@pytest.mark.parametrize("size", [0, -3, 2.5, True])
def test_invalid_size_rejected(size) -> None:
    with pytest.raises(ValueError):
        Grid(size)


def test_invalid_connectivity_rejected() -> None:
    with pytest.raises(ValueError):
        Grid(5, connectivity=6)


def test_position_equals_plain_tuple() -> None:
    assert Position(1, 2) == (1, 2)
    assert Position(1, 2) != Position(2, 1)
    assert Position(1, 2).offset(-1, 1) == Position(0, 3)


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (5, 0), (0, 5), (7, 7)])
def test_out_of_bounds_authoring_fails_fast(pos) -> None:
    grid = Grid(5)
    for setter in (grid.set_start, grid.set_goal, grid.set_obstacle):
        with pytest.raises(InvalidPositionError):
            setter(pos)
    assert grid.start is None and grid.goal is None
    assert all(cell.status is CellStatus.EMPTY for cell in grid)


def test_set_obstacles_is_all_or_nothing() -> None:
    grid = Grid(5)
    with pytest.raises(InvalidPositionError):
        grid.set_obstacles([(0, 0), (1, 1), (9, 9)])
    assert grid.obstacles() == []


def test_non_integer_position_rejected() -> None:
    grid = Grid(5)
    with pytest.raises(InvalidPositionError):
        grid.set_start((1.5, 2))
    with pytest.raises(InvalidPositionError):
        grid.set_goal("ab")


def test_later_marker_wins_on_overlap() -> None:
    grid = Grid(5)
    grid.set_goal((2, 2))
    grid.set_obstacle((2, 2))
    assert grid.cell((2, 2)).status is CellStatus.OBSTACLE
    # goal position is still remembered
    assert grid.goal == (2, 2)


def test_moving_start_clears_old_marker() -> None:
    grid = Grid(5)
    grid.set_start((0, 0))
    grid.set_start((1, 1))
    assert grid.cell((0, 0)).status is CellStatus.EMPTY
    assert grid.cell((1, 1)).status is CellStatus.START
    assert grid.start == (1, 1)


def test_clear_obstacle() -> None:
    grid = Grid(3)
    grid.set_obstacle((1, 1))
    grid.clear_obstacle((1, 1))
    assert grid.cell((1, 1)).status is CellStatus.EMPTY


def test_neighbors_eight_connected_order() -> None:
    grid = Grid(5)
    assert grid.neighbors((2, 2)) == [
        (3, 2), (3, 3), (2, 3), (1, 3), (1, 2), (1, 1), (2, 1), (3, 1),
    ]


def test_neighbors_clipped_at_corner() -> None:
    grid = Grid(5)
    assert grid.neighbors((0, 0)) == [(1, 0), (1, 1), (0, 1)]
    assert grid.neighbors((4, 4)) == [(3, 4), (3, 3), (4, 3)]


def test_neighbors_four_connected() -> None:
    grid = Grid(5, connectivity=4)
    assert grid.neighbors((2, 2)) == [(3, 2), (2, 3), (1, 2), (2, 1)]


def test_neighbors_include_obstacles() -> None:
    grid = Grid(3)
    grid.set_obstacle((1, 0))
    assert (1, 0) in grid.neighbors((0, 0))


def test_reset_search_state_keeps_layout() -> None:
    grid = Grid(3)
    grid.set_start((0, 0))
    grid.set_goal((2, 2))
    grid.set_obstacle((1, 1))
    cell = grid.cell((0, 1))
    cell.status = CellStatus.EXPANDED
    cell.closed = True
    cell.g = 10.0
    grid.best_priority[cell.position] = 12.0

    grid.reset_search_state()

    assert cell.status is CellStatus.EMPTY
    assert not cell.closed and cell.g == 0.0
    assert grid.best_priority[cell.position] == math.inf
    assert grid.cell((1, 1)).status is CellStatus.OBSTACLE
    assert grid.cell((0, 0)).status is CellStatus.START
    assert grid.cell((2, 2)).status is CellStatus.GOAL


def test_statuses_are_row_major() -> None:
    grid = Grid(3)
    grid.set_obstacle((2, 0))
    rows = grid.statuses()
    assert rows[0][2] is CellStatus.OBSTACLE
    assert rows[2][0] is CellStatus.EMPTY


def test_cell_cost_updates_keep_priority_invariant() -> None:
    grid = Grid(5)
    cell = grid.cell((1, 1))

    cell.update_cost(parent_g=20.0, move_cost=10.0)
    cell.estimate_priority((4, 5), euclidean, 10.0)

    assert cell.g == 30.0
    assert cell.h == pytest.approx(5.0)
    assert cell.f == pytest.approx(cell.g + cell.h * 10.0)


def test_grid_starts_idle() -> None:
    grid = Grid(3)
    assert grid.searching is False
