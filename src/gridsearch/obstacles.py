# src/gridsearch/obstacles.py
"""
Random obstacle placement.

The generator is always injected; nothing here seeds from the clock, so a
given seed reproduces the same layout.
"""

from __future__ import annotations

import logging
import random
from typing import List

from .grid import CellStatus, Grid, Position

logger = logging.getLogger(__name__)


def free_positions(grid: Grid) -> List[Position]:
    """Cells that could take an obstacle: not start, goal or obstacle."""
    reserved = {grid.start, grid.goal}
    return [
        cell.position
        for cell in grid
        if cell.status is CellStatus.EMPTY and cell.position not in reserved
    ]


def scatter_obstacles(
    grid: Grid,
    count: int,
    rng: random.Random,
) -> List[Position]:
    """
    Mark `count` distinct free cells as obstacles and return them.

    Raises ValueError if count is negative or exceeds the free cells.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    candidates = free_positions(grid)
    if count > len(candidates):
        raise ValueError(
            f"Cannot place {count} obstacles: only {len(candidates)} free cells"
        )

    chosen = rng.sample(candidates, count)
    grid.set_obstacles(chosen)
    logger.debug("Scattered %d obstacles on a %dx%d grid", count, grid.size, grid.size)
    return chosen
