# src/env/__init__.py
"""
Configuration for gridsearch: YAML engine defaults and named scenarios.
"""

from __future__ import annotations

from .builder import engine_from_config, engine_from_scenario, grid_from_scenario
from .loader import list_scenarios, load_engine_config, load_scenario
from .schema import EngineConfig, RandomObstacleConfig, ScenarioConfig

__all__ = [
    "EngineConfig",
    "RandomObstacleConfig",
    "ScenarioConfig",
    "engine_from_config",
    "engine_from_scenario",
    "grid_from_scenario",
    "list_scenarios",
    "load_engine_config",
    "load_scenario",
]
