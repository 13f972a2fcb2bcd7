# src/gridsearch/heuristics.py
"""
Distance estimates from a cell to the goal, in lattice units.

The engine multiplies these by the cost scale K, so every function here
returns "number of unit steps"-style distances, not costs.

- euclidean: straight-line distance (default)
- manhattan: 4-connected step count
- chebyshev: 8-connected step count with uniform step cost
- octile:    8-connected distance with diagonals weighted by sqrt(2)
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Tuple

HeuristicFn = Callable[[Tuple[int, int], Tuple[int, int]], float]

SQRT2 = math.sqrt(2.0)


def euclidean(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return math.sqrt(dx * dx + dy * dy)


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    return float(abs(a[0] - b[0]) + abs(a[1] - b[1]))


def chebyshev(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    return float(max(abs(a[0] - b[0]), abs(a[1] - b[1])))


def octile(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return (SQRT2 - 1.0) * min(dx, dy) + max(dx, dy)


HEURISTICS: Dict[str, HeuristicFn] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "chebyshev": chebyshev,
    "octile": octile,
}


def get_heuristic(name: str) -> HeuristicFn:
    """Look up a heuristic by name; raises ValueError for unknown names."""
    try:
        return HEURISTICS[name]
    except KeyError:
        known = ", ".join(sorted(HEURISTICS))
        raise ValueError(f"Unknown heuristic '{name}' (expected one of: {known})") from None
