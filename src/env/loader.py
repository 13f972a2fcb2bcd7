# src/env/loader.py
# load engine defaults and scenarios from config/gridsearch.yaml

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from gridsearch.heuristics import HEURISTICS

from .schema import EngineConfig, RandomObstacleConfig, ScenarioConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "gridsearch.yaml"

# Environment variable overriding the default config file location.
CONFIG_ENV_VAR = "GRIDSEARCH_CONFIG"

_ENGINE_KEYS = (
    "size",
    "connectivity",
    "step_cost",
    "heuristic",
    "diagonal_multiplier",
    "max_expansions",
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "resolve_config_path",
    "load_engine_config",
    "load_scenario",
    "list_scenarios",
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Explicit path, else $GRIDSEARCH_CONFIG, else config/gridsearch.yaml."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML file into a raw dict.

    Raises:
        FileNotFoundError: if the path does not exist.
        ValueError: if the root YAML node is not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data).__name__}")
    return data


def _parse_pair(raw: Any, what: str) -> Tuple[int, int]:
    if (
        not isinstance(raw, (list, tuple))
        or len(raw) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in raw)
    ):
        raise ValueError(f"{what} must be an [x, y] pair of integers, got {raw!r}")
    return int(raw[0]), int(raw[1])


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_engine(raw: Dict[str, Any], base: EngineConfig, where: str) -> EngineConfig:
    """Overlay engine keys from raw onto base and validate the result."""
    values = {key: getattr(base, key) for key in _ENGINE_KEYS}
    for key in _ENGINE_KEYS:
        if key in raw:
            values[key] = raw[key]

    size = values["size"]
    if not _is_int(size) or size <= 0:
        raise ValueError(f"{where}: size must be a positive integer, got {size!r}")
    if values["connectivity"] not in (4, 8):
        raise ValueError(f"{where}: connectivity must be 4 or 8, got {values['connectivity']!r}")
    try:
        step_cost = float(values["step_cost"])
        diagonal_multiplier = float(values["diagonal_multiplier"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: step_cost and diagonal_multiplier must be numbers") from exc
    if step_cost <= 0:
        raise ValueError(f"{where}: step_cost must be > 0, got {step_cost}")
    if diagonal_multiplier <= 0:
        raise ValueError(f"{where}: diagonal_multiplier must be > 0, got {diagonal_multiplier}")
    if values["heuristic"] not in HEURISTICS:
        raise ValueError(f"{where}: unknown heuristic {values['heuristic']!r}")
    max_expansions = values["max_expansions"]
    if max_expansions is not None and (not _is_int(max_expansions) or max_expansions < 0):
        raise ValueError(f"{where}: max_expansions must be a non-negative integer or null")

    return EngineConfig(
        size=size,
        connectivity=values["connectivity"],
        step_cost=step_cost,
        heuristic=values["heuristic"],
        diagonal_multiplier=diagonal_multiplier,
        max_expansions=max_expansions,
    )


def _engine_section(cfg: Dict[str, Any], path: Path) -> EngineConfig:
    raw = cfg.get("engine") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"'engine' in {path} must be a mapping")
    return _parse_engine(raw, EngineConfig(), where="engine")


def _scenarios_section(cfg: Dict[str, Any], path: Path) -> Dict[str, Any]:
    scenarios = cfg.get("scenarios") or {}
    if not isinstance(scenarios, dict):
        raise ValueError(f"'scenarios' in {path} must be a mapping")
    return scenarios


def _parse_scenario(name: str, raw: Any, defaults: EngineConfig) -> ScenarioConfig:
    """
    Parse one scenario mapping.

    Expected shape:

    scenarios:
      open_field:
        size: 5
        start: [0, 0]
        goal: [4, 4]
        obstacles:
          - [2, 2]
        random_obstacles: { count: 4, seed: 7 }
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Scenario '{name}' must be a mapping")
    try:
        start = _parse_pair(raw["start"], f"Scenario '{name}' start")
        goal = _parse_pair(raw["goal"], f"Scenario '{name}' goal")
    except KeyError as exc:
        raise ValueError(f"Scenario '{name}' is missing required key: {exc!s}") from exc

    engine = _parse_engine(raw, defaults, where=f"scenario '{name}'")

    obstacles_raw = raw.get("obstacles", []) or []
    if not isinstance(obstacles_raw, list):
        raise ValueError(f"Scenario '{name}' obstacles must be a list of [x, y] pairs")
    obstacles: List[Tuple[int, int]] = [
        _parse_pair(o, f"Scenario '{name}' obstacle") for o in obstacles_raw
    ]

    random_raw = raw.get("random_obstacles")
    random_obstacles: Optional[RandomObstacleConfig] = None
    if random_raw is not None:
        if not isinstance(random_raw, dict):
            raise ValueError(f"Scenario '{name}' random_obstacles must be a mapping")
        try:
            count = random_raw["count"]
            seed = random_raw["seed"]
        except KeyError as exc:
            raise ValueError(
                f"Scenario '{name}' random_obstacles missing required key: {exc!s}"
            ) from exc
        if not _is_int(count) or count < 0:
            raise ValueError(
                f"Scenario '{name}' random_obstacles count must be a non-negative integer, got {count!r}"
            )
        if not _is_int(seed):
            raise ValueError(f"Scenario '{name}' random_obstacles seed must be an integer, got {seed!r}")
        random_obstacles = RandomObstacleConfig(count=count, seed=seed)

    return ScenarioConfig(
        name=str(name),
        engine=engine,
        start=start,
        goal=goal,
        obstacles=obstacles,
        random_obstacles=random_obstacles,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_engine_config(path: Optional[Path] = None) -> EngineConfig:
    """Engine defaults from the 'engine' section (built-in defaults if absent)."""
    cfg_path = resolve_config_path(path)
    return _engine_section(_load_yaml(cfg_path), cfg_path)


def list_scenarios(path: Optional[Path] = None) -> List[str]:
    cfg_path = resolve_config_path(path)
    return sorted(str(name) for name in _scenarios_section(_load_yaml(cfg_path), cfg_path))


def load_scenario(name: str, path: Optional[Path] = None) -> ScenarioConfig:
    """Resolve one named scenario, with engine defaults applied."""
    cfg_path = resolve_config_path(path)
    cfg = _load_yaml(cfg_path)
    defaults = _engine_section(cfg, cfg_path)
    scenarios = _scenarios_section(cfg, cfg_path)
    if name not in scenarios:
        raise KeyError(f"Scenario '{name}' not found in {cfg_path}")
    scenario = _parse_scenario(name, scenarios[name], defaults)
    logger.debug("Loaded scenario %s from %s", name, cfg_path)
    return scenario
