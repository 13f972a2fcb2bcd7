# src/gridsearch/authoring.py
"""
AuthoringSession: the select-start, select-goal, place-obstacles flow.

Each select(pos) applies the marker for the current phase:

    START -> GOAL -> OBSTACLES -> PATHING

Once the obstacle budget is used up (default 2 * S) the search runs, the
reconstructed route is marked PATH on the grid, and the SearchResult is
returned. finish() triggers the search early.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional, Sequence

from monitoring.events import EventType
from monitoring.logger import log_event

from .engine import SearchEngine, SearchResult
from .errors import AuthoringError
from .routes import mark_route

logger = logging.getLogger(__name__)


class AuthoringPhase(Enum):
    START = auto()
    GOAL = auto()
    OBSTACLES = auto()
    PATHING = auto()


class AuthoringSession:
    def __init__(self, engine: SearchEngine, obstacle_budget: Optional[int] = None) -> None:
        budget = obstacle_budget if obstacle_budget is not None else 2 * engine.grid.size
        if budget < 0:
            raise ValueError(f"obstacle_budget must be >= 0, got {budget}")
        self.engine = engine
        self.obstacle_budget = budget
        self.obstacles_placed = 0
        self.phase = AuthoringPhase.START
        self.result: Optional[SearchResult] = None

    @property
    def obstacles_left(self) -> int:
        return max(0, self.obstacle_budget - self.obstacles_placed)

    def select(self, pos: Sequence[int]) -> Optional[SearchResult]:
        """
        Apply the current phase's marker at pos.

        Returns the SearchResult when this selection completed the session,
        otherwise None. Invalid positions raise InvalidPositionError and
        leave the phase unchanged.
        """
        grid = self.engine.grid

        if self.phase is AuthoringPhase.START:
            grid.set_start(pos)
            self._advance(AuthoringPhase.GOAL)
            return None

        if self.phase is AuthoringPhase.GOAL:
            grid.set_goal(pos)
            self._advance(AuthoringPhase.OBSTACLES)
            logger.info("Select the obstacles on the map (%d allowed).", self.obstacle_budget)
            if self.obstacle_budget == 0:
                return self.finish()
            return None

        if self.phase is AuthoringPhase.OBSTACLES:
            grid.set_obstacle(pos)
            self.obstacles_placed += 1
            if self.obstacles_left == 0:
                return self.finish()
            logger.info("%d obstacles left.", self.obstacles_left)
            return None

        raise AuthoringError("Session already finished; create a new one to author again")

    def finish(self) -> SearchResult:
        """Run the search now and mark the route on the grid."""
        if self.phase is AuthoringPhase.PATHING:
            raise AuthoringError("Session already finished")
        if self.phase is not AuthoringPhase.OBSTACLES:
            raise AuthoringError(f"Cannot finish during phase {self.phase.name}; start and goal are required")

        self._advance(AuthoringPhase.PATHING)
        result = self.engine.run()
        mark_route(self.engine.grid, result.route)
        self.result = result
        return result

    def _advance(self, phase: AuthoringPhase) -> None:
        previous = self.phase
        self.phase = phase
        bus = self.engine.bus
        if bus is not None:
            log_event(
                bus=bus,
                module=__name__,
                event_type=EventType.AUTHORING_PHASE_CHANGE,
                message="Authoring phase changed",
                payload={"from": previous.name, "to": phase.name},
            )
