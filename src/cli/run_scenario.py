# src/cli/run_scenario.py

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from env.builder import engine_from_scenario
from env.loader import list_scenarios, load_scenario, resolve_config_path
from gridsearch.engine import SearchResult
from gridsearch.errors import GridSearchError
from gridsearch.grid import CellStatus, Grid
from gridsearch.routes import mark_route
from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger
from monitoring.logging_config import configure_logging

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2

STATUS_STYLES = {
    CellStatus.EMPTY: "dim",
    CellStatus.START: "bold green",
    CellStatus.GOAL: "bold red",
    CellStatus.OBSTACLE: "white on grey23",
    CellStatus.EXPANDED: "cyan",
    CellStatus.PATH: "bold yellow",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run an A* grid search scenario from a YAML config."
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a gridsearch YAML file")
    parser.add_argument("--scenario", default="open_field", help="Scenario name (from the config)")
    parser.add_argument("--list", action="store_true", help="List scenario names and exit")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--events-log", type=Path, default=None, help="Write search events as JSONL")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for stdout",
    )
    parser.add_argument(
        "--search-log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Level for the gridsearch/env loggers (DEBUG logs every expansion)",
    )
    return parser


def render_grid(grid: Grid) -> Text:
    text = Text()
    for y, row in enumerate(grid.statuses()):
        for x, status in enumerate(row):
            if x:
                text.append(" ")
            text.append(status.marker, style=STATUS_STYLES[status])
        if y < grid.size - 1:
            text.append("\n")
    return text


def summary_table(name: str, result: SearchResult) -> Table:
    table = Table(title=f"Scenario: {name}", show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    table.add_row("status", result.status.name)
    table.add_row("expansions", str(result.expansions))
    table.add_row("route length", str(len(result.route)))
    table.add_row("cost", "-" if result.cost is None else f"{result.cost:.2f}")
    if result.reason:
        table.add_row("reason", result.reason)
    return table


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    search_level = getattr(logging, args.search_log_level) if args.search_log_level else None
    configure_logging(getattr(logging, args.log_level), search_level=search_level)
    console = console or Console()

    config_path = resolve_config_path(args.config)
    try:
        if args.list:
            for name in list_scenarios(config_path):
                console.print(name)
            return EXIT_FOUND
        scenario = load_scenario(args.scenario, config_path)
        bus = EventBus()
        engine = engine_from_scenario(scenario, bus=bus)
    except (FileNotFoundError, KeyError, ValueError, GridSearchError) as exc:
        console.print(f"[bold red]config error:[/] {exc}")
        return EXIT_CONFIG_ERROR

    events_log = JsonFileLogger(args.events_log, bus) if args.events_log else None
    try:
        result = engine.run()
    finally:
        if events_log is not None:
            events_log.close()

    mark_route(engine.grid, result.route)

    if args.json:
        print(json.dumps({"scenario": scenario.name, **result.to_dict()}, indent=2, sort_keys=True))
    else:
        console.print(summary_table(scenario.name, result))
        console.print(render_grid(engine.grid))

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


if __name__ == "__main__":
    raise SystemExit(main())
