# src/gridsearch/engine.py
"""
A* search engine over a Grid.

- Seeds the frontier with the start cell (g = 0).
- Pops the lowest-f cell, closes it on the authoritative grid cell and
  appends a snapshot of it to the expansion trace.
- Stops when the goal is popped (FOUND) or the frontier runs dry (EXHAUSTED).
- Optional max_expansions budget and cancellation token as guards.

Cost model: every move costs step_cost (K); the heuristic distance is scaled
by the same K, so f = g + h * K. With diagonal_multiplier=1.0 (the default)
diagonal and orthogonal moves cost the same; pass math.sqrt(2) to charge
diagonals by their length.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Protocol, Tuple

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .errors import MissingEndpointError, SearchInProgressError
from .frontier import Frontier
from .grid import Cell, CellStatus, Grid, Position
from .heuristics import get_heuristic
from .routes import reconstruct_route

logger = logging.getLogger(__name__)

DEFAULT_STEP_COST = 10.0


class EngineState(Enum):
    READY = auto()
    RUNNING = auto()
    TERMINATED = auto()


class SearchStatus(Enum):
    FOUND = auto()
    EXHAUSTED = auto()
    BUDGET_EXCEEDED = auto()
    CANCELLED = auto()


class CancelToken(Protocol):
    """Anything with is_set(), e.g. threading.Event."""

    def is_set(self) -> bool: ...


@dataclass
class SearchResult:
    """Structured result for one run()."""

    status: SearchStatus
    trace: List[Cell] = field(default_factory=list)
    expansions: int = 0
    route: List[Position] = field(default_factory=list)
    cost: Optional[float] = None
    reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def trace_positions(self) -> List[Position]:
        return [cell.position for cell in self.trace]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "expansions": self.expansions,
            "cost": self.cost,
            "reason": self.reason,
            "trace": [list(p) for p in self.trace_positions()],
            "route": [list(p) for p in self.route],
        }


class SearchEngine:
    """
    Single-threaded, non-reentrant A* runner bound to one Grid.

    The engine owns the frontier for the duration of a run. Calling run()
    again after it terminated starts a fresh search on the same layout.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        step_cost: float = DEFAULT_STEP_COST,
        heuristic: str = "euclidean",
        diagonal_multiplier: float = 1.0,
        max_expansions: Optional[int] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        if step_cost <= 0:
            raise ValueError(f"step_cost must be > 0, got {step_cost!r}")
        if diagonal_multiplier <= 0:
            raise ValueError(f"diagonal_multiplier must be > 0, got {diagonal_multiplier!r}")
        if max_expansions is not None and max_expansions < 0:
            raise ValueError(f"max_expansions must be >= 0, got {max_expansions!r}")

        self.grid = grid
        self.step_cost = float(step_cost)
        self.heuristic_name = heuristic
        self.heuristic = get_heuristic(heuristic)
        self.diagonal_multiplier = float(diagonal_multiplier)
        self.max_expansions = max_expansions
        self._bus = bus

        self._state = EngineState.READY
        self._last_result: Optional[SearchResult] = None
        self._run_id: Optional[str] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def bus(self) -> Optional[EventBus]:
        return self._bus

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self._last_result

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, cancel: Optional[CancelToken] = None) -> SearchResult:
        """Execute the full search synchronously and return its result."""
        if self._state is EngineState.RUNNING:
            raise SearchInProgressError("A search is already running on this engine")
        if self.grid.searching:
            raise SearchInProgressError("Another engine is already searching this grid")
        start, goal = self._require_endpoints()

        self._state = EngineState.RUNNING
        self.grid.searching = True
        self._run_id = uuid.uuid4().hex
        try:
            result = self._search(start, goal, cancel)
        finally:
            self.grid.searching = False
            self._state = EngineState.TERMINATED

        self._last_result = result
        logger.info(
            "Search %s after %d expansions (start=%s goal=%s)",
            result.status.name, result.expansions, tuple(start), tuple(goal),
        )
        self._emit(
            EventType.SEARCH_FINISHED,
            "Search finished",
            {
                "status": result.status.name,
                "expansions": result.expansions,
                "cost": result.cost,
                "route_length": len(result.route),
                "reason": result.reason,
            },
        )
        return result

    # ------------------------------------------------------------------
    # A* loop
    # ------------------------------------------------------------------

    def _search(
        self,
        start: Position,
        goal: Position,
        cancel: Optional[CancelToken],
    ) -> SearchResult:
        grid = self.grid
        grid.reset_search_state()

        # Endpoint markers are stamped at search time; they win over any
        # obstacle marker placed on the same cell.
        grid.cell(start).status = CellStatus.START
        grid.cell(goal).status = CellStatus.GOAL

        self._emit(
            EventType.SEARCH_STARTED,
            "Search started",
            {
                "start": list(start),
                "goal": list(goal),
                "size": grid.size,
                "connectivity": grid.connectivity,
                "heuristic": self.heuristic_name,
            },
        )

        frontier = Frontier()
        seed = grid.cell(start)
        seed.g = 0.0
        seed.estimate_priority(goal, self.heuristic, self.step_cost)
        seed.in_open_set = True
        grid.best_priority[start] = seed.f
        frontier.push(seed)

        trace: List[Cell] = []

        while not frontier.is_empty():
            if cancel is not None and cancel.is_set():
                return self._stop(trace, SearchStatus.CANCELLED, "cancelled", frontier)
            if self.max_expansions is not None and len(trace) >= self.max_expansions:
                return self._stop(trace, SearchStatus.BUDGET_EXCEEDED, "max_expansions_exhausted", frontier)

            u = frontier.pop_min()
            u.in_open_set = False
            u.closed = True
            trace.append(u.snapshot())

            logger.debug("Expanded %s g=%.3f h=%.3f f=%.3f", tuple(u.position), u.g, u.h, u.f)
            self._emit(
                EventType.CELL_EXPANDED,
                "Expanded cell",
                {"position": list(u.position), "g": u.g, "h": u.h, "f": u.f},
            )

            if u.status is CellStatus.GOAL:
                self._drain(frontier)
                return SearchResult(
                    status=SearchStatus.FOUND,
                    trace=trace,
                    expansions=len(trace),
                    route=reconstruct_route(grid),
                    cost=u.g,
                )

            if u.position != start:
                u.status = CellStatus.EXPANDED

            self._expand(u, goal, frontier)

        return SearchResult(
            status=SearchStatus.EXHAUSTED,
            trace=trace,
            expansions=len(trace),
            reason="no_path_found",
        )

    def _expand(self, u: Cell, goal: Position, frontier: Frontier) -> None:
        """Discover or relax every open neighbor of u."""
        grid = self.grid
        for npos in grid.neighbors(u.position):
            v = grid.cells[npos.x][npos.y]
            if v.closed or v.status is CellStatus.OBSTACLE:
                continue

            move = self._move_cost(u.position, npos)

            if not v.in_open_set:
                v.update_cost(u.g, move)
                v.estimate_priority(goal, self.heuristic, self.step_cost)
                v.parent = u.position
                v.in_open_set = True
                grid.best_priority[npos] = v.f
                frontier.push(v)
                continue

            # h depends only on the position, so a queued cell keeps its h.
            if u.g + move + v.h * self.step_cost < grid.best_priority[npos]:
                v.update_cost(u.g, move)
                v.estimate_priority(goal, self.heuristic, self.step_cost)
                v.parent = u.position
                grid.best_priority[npos] = v.f
                frontier.relax(npos, v.f)
                self._emit(
                    EventType.CELL_RELAXED,
                    "Relaxed cell",
                    {"position": list(npos), "g": v.g, "f": v.f, "parent": list(u.position)},
                )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _move_cost(self, a: Position, b: Position) -> float:
        if a.x != b.x and a.y != b.y:
            return self.step_cost * self.diagonal_multiplier
        return self.step_cost

    def _require_endpoints(self) -> Tuple[Position, Position]:
        start, goal = self.grid.start, self.grid.goal
        if start is None or goal is None:
            missing = "start" if start is None else "goal"
            raise MissingEndpointError(f"Cannot run a search without a {missing} position")
        return start, goal

    @staticmethod
    def _drain(frontier: Frontier) -> None:
        for cell in frontier.clear():
            cell.in_open_set = False

    def _stop(
        self,
        trace: List[Cell],
        status: SearchStatus,
        reason: str,
        frontier: Frontier,
    ) -> SearchResult:
        self._drain(frontier)
        logger.warning("Search stopped early: %s", reason)
        return SearchResult(status=status, trace=trace, expansions=len(trace), reason=reason)

    def _emit(self, event_type: EventType, message: str, payload: Dict[str, Any]) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=__name__,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self._run_id,
        )
