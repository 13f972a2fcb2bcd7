# EngineConfig, ScenarioConfig dataclasses
# src/env/schema.py

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class EngineConfig:
    """Lattice and cost settings for one SearchEngine."""
    size: int = 16
    connectivity: int = 8              # 4 or 8
    step_cost: float = 10.0            # K: per-step cost and heuristic scale
    heuristic: str = "euclidean"       # euclidean | manhattan | chebyshev | octile
    diagonal_multiplier: float = 1.0   # 1.0 keeps diagonals at the same cost
    max_expansions: Optional[int] = None


@dataclass
class RandomObstacleConfig:
    """Seeded random obstacle placement."""
    count: int
    seed: int


@dataclass
class ScenarioConfig:
    """A named start/goal/obstacle layout plus its engine settings."""
    name: str
    engine: EngineConfig
    start: Tuple[int, int]
    goal: Tuple[int, int]
    obstacles: List[Tuple[int, int]] = field(default_factory=list)
    random_obstacles: Optional[RandomObstacleConfig] = None
