# src/env/builder.py
"""
Adapters: ScenarioConfig -> Grid -> SearchEngine.

Positions are validated by the Grid itself, so an out-of-bounds start, goal
or obstacle surfaces as InvalidPositionError here, before any search runs.
"""

from __future__ import annotations

import random
from typing import Optional

from gridsearch.engine import SearchEngine
from gridsearch.grid import Grid
from gridsearch.obstacles import scatter_obstacles
from monitoring.bus import EventBus

from .schema import EngineConfig, ScenarioConfig


def grid_from_scenario(scenario: ScenarioConfig) -> Grid:
    """Build a Grid with the scenario's start, goal and obstacles applied."""
    grid = Grid(scenario.engine.size, connectivity=scenario.engine.connectivity)
    grid.set_obstacles(scenario.obstacles)
    grid.set_start(scenario.start)
    grid.set_goal(scenario.goal)
    if scenario.random_obstacles is not None:
        rng = random.Random(scenario.random_obstacles.seed)
        scatter_obstacles(grid, scenario.random_obstacles.count, rng)
    return grid


def engine_from_config(
    grid: Grid,
    config: EngineConfig,
    bus: Optional[EventBus] = None,
) -> SearchEngine:
    return SearchEngine(
        grid,
        step_cost=config.step_cost,
        heuristic=config.heuristic,
        diagonal_multiplier=config.diagonal_multiplier,
        max_expansions=config.max_expansions,
        bus=bus,
    )


def engine_from_scenario(
    scenario: ScenarioConfig,
    bus: Optional[EventBus] = None,
) -> SearchEngine:
    return engine_from_config(grid_from_scenario(scenario), scenario.engine, bus=bus)
