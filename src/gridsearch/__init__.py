# src/gridsearch/__init__.py
"""
A* search over a fixed-size 2D lattice.

Provides:
- Grid / Cell / Position / CellStatus: the lattice and its per-cell state
- Frontier: indexed priority queue with decrease-key
- SearchEngine: the A* loop, returning a SearchResult
- reconstruct_route / mark_route: parent-pointer route recovery
- scatter_obstacles: seeded random obstacle placement
- AuthoringSession: start -> goal -> obstacles -> search flow
- format_grid: plain-text status dump
"""

from __future__ import annotations

from .authoring import AuthoringPhase, AuthoringSession
from .engine import (
    DEFAULT_STEP_COST,
    EngineState,
    SearchEngine,
    SearchResult,
    SearchStatus,
)
from .errors import (
    AuthoringError,
    EmptyFrontierError,
    GridSearchError,
    InvalidPositionError,
    MissingEndpointError,
    SearchInProgressError,
)
from .frontier import Frontier
from .grid import Cell, CellStatus, Grid, Position
from .heuristics import HEURISTICS, get_heuristic
from .obstacles import scatter_obstacles
from .render import format_grid
from .routes import mark_route, reconstruct_route

__all__ = [
    "AuthoringPhase",
    "AuthoringSession",
    "DEFAULT_STEP_COST",
    "EngineState",
    "SearchEngine",
    "SearchResult",
    "SearchStatus",
    "AuthoringError",
    "EmptyFrontierError",
    "GridSearchError",
    "InvalidPositionError",
    "MissingEndpointError",
    "SearchInProgressError",
    "Frontier",
    "Cell",
    "CellStatus",
    "Grid",
    "Position",
    "HEURISTICS",
    "get_heuristic",
    "scatter_obstacles",
    "format_grid",
    "mark_route",
    "reconstruct_route",
]
