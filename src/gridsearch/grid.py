# src/gridsearch/grid.py
"""
Grid model: an S x S lattice of Cells carrying A* search state.

This module does not run any search. It only:
- Owns the cells and the best-known-priority map.
- Exposes the authoring calls (set_start / set_goal / set_obstacle).
- Produces in-bounds neighbor positions for a fixed offset table.

Obstacle filtering and cost accounting belong to the engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .errors import InvalidPositionError
from .heuristics import HeuristicFn

# Sentinel stored in the best-known-priority map for "never discovered".
UNSET_PRIORITY = math.inf

# 8 directions, counter-clockwise starting east.
OFFSETS_8: Tuple[Tuple[int, int], ...] = (
    (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1),
)

# 4 directions
OFFSETS_4: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

CONNECTIVITY_OFFSETS: Dict[int, Tuple[Tuple[int, int], ...]] = {
    4: OFFSETS_4,
    8: OFFSETS_8,
}


class Position(NamedTuple):
    """Immutable (x, y) lattice coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


class CellStatus(Enum):
    """Display/search marker for a cell. Values are the one-letter markers."""

    EMPTY = "."
    START = "S"
    GOAL = "F"
    OBSTACLE = "O"
    EXPANDED = "P"
    PATH = "#"

    @property
    def marker(self) -> str:
        return self.value


@dataclass
class Cell:
    """
    Per-lattice-site state.

    Invariant: f == g + h * K for every cell that has been assigned a cost.
    """

    position: Position
    status: CellStatus = CellStatus.EMPTY
    in_open_set: bool = False
    closed: bool = False
    g: float = 0.0  # cost so far
    h: float = 0.0  # estimated distance to the goal
    f: float = 0.0  # total estimated cost (priority, lower = better)
    parent: Optional[Position] = None

    def update_cost(self, parent_g: float, move_cost: float) -> None:
        """Set g from the parent's cost plus the cost of the move."""
        self.g = parent_g + move_cost

    def estimate_priority(
        self,
        goal: Tuple[int, int],
        heuristic: HeuristicFn,
        cost_scale: float,
    ) -> None:
        """Recompute h from the goal and f = g + h * K."""
        self.h = heuristic(self.position, goal)
        self.f = self.g + self.h * cost_scale

    def reset_search_state(self) -> None:
        self.in_open_set = False
        self.closed = False
        self.g = 0.0
        self.h = 0.0
        self.f = 0.0
        self.parent = None

    def snapshot(self) -> "Cell":
        """Detached copy of the current state (used for expansion traces)."""
        return replace(self)


def as_position(value: Sequence[int]) -> Position:
    """Coerce an (x, y) pair into a Position; rejects anything else."""
    if isinstance(value, Position):
        return value
    try:
        x, y = value
    except (TypeError, ValueError):
        raise InvalidPositionError(f"Expected an (x, y) pair, got {value!r}") from None
    if not isinstance(x, int) or not isinstance(y, int) or isinstance(x, bool) or isinstance(y, bool):
        raise InvalidPositionError(f"Position components must be integers, got {value!r}")
    return Position(x, y)


class Grid:
    """
    S x S lattice of Cells, indexed cells[x][y].

    Responsibilities:
    - Allocate and reset cells (all EMPTY, sentinel priorities).
    - Validate and apply authoring markers.
    - Provide neighbor positions for the configured connectivity.

    It does NOT:
    - Validate overlapping roles (the later marker wins).
    - Filter obstacles out of neighbor lists.

    `searching` is owned by SearchEngine.run(): it is True while any engine
    is searching this grid, and a second search is refused until it clears.
    """

    def __init__(self, size: int, connectivity: int = 8) -> None:
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError(f"Grid size must be a positive integer, got {size!r}")
        if connectivity not in CONNECTIVITY_OFFSETS:
            raise ValueError(f"connectivity must be 4 or 8, got {connectivity!r}")

        self.size = size
        self.connectivity = connectivity
        self.offsets = CONNECTIVITY_OFFSETS[connectivity]

        self.cells: List[List[Cell]] = []
        self.best_priority: Dict[Position, float] = {}
        self.start: Optional[Position] = None
        self.goal: Optional[Position] = None
        self.searching = False
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Re-initialize every cell to EMPTY and forget start/goal."""
        self.cells = [
            [Cell(position=Position(x, y)) for y in range(self.size)]
            for x in range(self.size)
        ]
        self.best_priority = {cell.position: UNSET_PRIORITY for cell in self}
        self.start = None
        self.goal = None

    def reset_search_state(self) -> None:
        """
        Clear everything a previous search wrote, keeping the authored layout.

        Obstacle, start and goal markers survive; EXPANDED and PATH markers
        go back to EMPTY.
        """
        for cell in self:
            cell.reset_search_state()
            if cell.status in (CellStatus.EXPANDED, CellStatus.PATH):
                cell.status = CellStatus.EMPTY
            self.best_priority[cell.position] = UNSET_PRIORITY

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Cell]:
        for column in self.cells:
            yield from column

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, pos: Sequence[int]) -> Cell:
        p = self._checked(pos)
        return self.cells[p.x][p.y]

    def neighbors(self, pos: Sequence[int]) -> List[Position]:
        """In-bounds neighbor positions in offset-table order."""
        p = self._checked(pos)
        out: List[Position] = []
        for dx, dy in self.offsets:
            n = p.offset(dx, dy)
            if self.in_bounds(n):
                out.append(n)
        return out

    def statuses(self) -> List[List[CellStatus]]:
        """Status matrix indexed [y][x] (row-major, for display)."""
        return [
            [self.cells[x][y].status for x in range(self.size)]
            for y in range(self.size)
        ]

    def obstacles(self) -> List[Position]:
        return [cell.position for cell in self if cell.status is CellStatus.OBSTACLE]

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------

    def set_obstacle(self, pos: Sequence[int]) -> None:
        self.cell(pos).status = CellStatus.OBSTACLE

    def set_obstacles(self, positions: Iterable[Sequence[int]]) -> None:
        """Validate every position first, then mark them all."""
        checked = [self._checked(p) for p in positions]
        for p in checked:
            self.cells[p.x][p.y].status = CellStatus.OBSTACLE

    def clear_obstacle(self, pos: Sequence[int]) -> None:
        cell = self.cell(pos)
        if cell.status is CellStatus.OBSTACLE:
            cell.status = CellStatus.EMPTY

    def set_start(self, pos: Sequence[int]) -> None:
        p = self._checked(pos)
        self._move_marker(self.start, CellStatus.START)
        self.start = p
        self.cells[p.x][p.y].status = CellStatus.START

    def set_goal(self, pos: Sequence[int]) -> None:
        p = self._checked(pos)
        self._move_marker(self.goal, CellStatus.GOAL)
        self.goal = p
        self.cells[p.x][p.y].status = CellStatus.GOAL

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _checked(self, pos: Sequence[int]) -> Position:
        p = as_position(pos)
        if not self.in_bounds(p):
            raise InvalidPositionError(
                f"Position {tuple(p)} is outside the {self.size}x{self.size} grid"
            )
        return p

    def _move_marker(self, old: Optional[Position], marker: CellStatus) -> None:
        """Clear a previous start/goal cell if it still carries its marker."""
        if old is None:
            return
        cell = self.cells[old.x][old.y]
        if cell.status is marker:
            cell.status = CellStatus.EMPTY
