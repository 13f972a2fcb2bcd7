# src/gridsearch/routes.py
"""
Route reconstruction on top of a finished search.

The engine records a parent position on every discovery and relaxation,
so the minimal route is recovered by walking parents back from the goal.
The expansion trace itself is not a route.
"""

from __future__ import annotations

from typing import Iterable, List

from .grid import CellStatus, Grid, Position


def reconstruct_route(grid: Grid) -> List[Position]:
    """
    Return start -> goal positions by following parent pointers.

    Returns [] if start/goal are unset or the goal was never closed
    by a search.
    """
    start, goal = grid.start, grid.goal
    if start is None or goal is None:
        return []
    if not grid.cell(goal).closed:
        return []

    route: List[Position] = [goal]
    current = goal
    # A route can never visit more cells than the lattice holds.
    for _ in range(grid.size * grid.size):
        if current == start:
            route.reverse()
            return route
        parent = grid.cell(current).parent
        if parent is None:
            return []
        route.append(parent)
        current = parent
    raise RuntimeError("Parent pointers form a cycle; grid search state is corrupt")


def route_cost(grid: Grid, route: List[Position]) -> float:
    """Accumulated g of the route's final cell (0.0 for an empty route)."""
    if not route:
        return 0.0
    return grid.cell(route[-1]).g


def mark_route(grid: Grid, route: Iterable[Position]) -> None:
    """Set PATH on every route cell except the start and goal."""
    for pos in route:
        cell = grid.cell(pos)
        if cell.status not in (CellStatus.START, CellStatus.GOAL):
            cell.status = CellStatus.PATH
