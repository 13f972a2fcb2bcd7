# src/gridsearch/render.py
"""Plain-text dump of cell statuses, one row per y."""

from __future__ import annotations

from typing import List

from .grid import Grid


def status_rows(grid: Grid) -> List[str]:
    return [" ".join(status.marker for status in row) for row in grid.statuses()]


def format_grid(grid: Grid) -> str:
    return "\n".join(status_rows(grid))
