# tests/test_monitoring_search_events.py
"""
Tests for monitoring.bus / monitoring.logger wired to the search engine.

Covers:
- Publish/subscribe and unsubscribe behavior
- A failing subscriber does not stop delivery
- Engine event sequence and correlation ids
- JSONL output of JsonFileLogger
- configure_logging handler and search-logger levels
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

import pytest

from gridsearch.engine import SearchEngine
from gridsearch.grid import Grid
from monitoring.bus import EventBus
from monitoring.events import EventType, MonitoringEvent
from monitoring.logger import JsonFileLogger, log_event
from monitoring.logging_config import configure_logging


def make_engine(bus: EventBus) -> SearchEngine:
    grid = Grid(5)
    grid.set_start((0, 0))
    grid.set_goal((4, 4))
    return SearchEngine(grid, bus=bus)


def test_publish_subscribe_and_unsubscribe() -> None:
    bus = EventBus()
    received: List[MonitoringEvent] = []
    bus.subscribe(received.append)

    log_event(bus, "test", EventType.LOG, "first")
    bus.unsubscribe(received.append)
    log_event(bus, "test", EventType.LOG, "second")
    bus.unsubscribe(received.append)  # safe when absent

    assert [e.message for e in received] == ["first"]
    assert received[0].payload == {}


def test_failing_subscriber_is_logged_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    bus = EventBus()
    received: List[MonitoringEvent] = []

    def broken(evt: MonitoringEvent) -> None:
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    with caplog.at_level(logging.ERROR, logger="monitoring.bus"):
        log_event(bus, "test", EventType.LOG, "still delivered")

    assert len(received) == 1
    assert "failed on LOG" in caplog.text


def test_engine_event_sequence() -> None:
    bus = EventBus()
    events: List[MonitoringEvent] = []
    bus.subscribe(events.append)

    result = make_engine(bus).run()

    types = [e.event_type for e in events]
    assert types[0] is EventType.SEARCH_STARTED
    assert types[-1] is EventType.SEARCH_FINISHED
    assert types.count(EventType.CELL_EXPANDED) == result.expansions
    assert len({e.correlation_id for e in events}) == 1
    assert events[-1].payload["status"] == "FOUND"
    assert events[-1].payload["route_length"] == len(result.route)
    expanded = [e.payload["position"] for e in events if e.event_type is EventType.CELL_EXPANDED]
    assert expanded == [list(p) for p in result.trace_positions()]


def test_each_run_gets_its_own_correlation_id() -> None:
    bus = EventBus()
    events: List[MonitoringEvent] = []
    bus.subscribe(events.append)
    engine = make_engine(bus)

    engine.run()
    engine.run()

    finished = [e for e in events if e.event_type is EventType.SEARCH_FINISHED]
    assert len(finished) == 2
    assert finished[0].correlation_id != finished[1].correlation_id


def test_json_file_logger_writes_jsonl(tmp_path: Path) -> None:
    bus = EventBus()
    path = tmp_path / "logs" / "events.jsonl"

    with JsonFileLogger(path, bus):
        make_engine(bus).run()
    # closed loggers stop receiving
    log_event(bus, "test", EventType.LOG, "after close")

    lines = path.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert records[0]["event_type"] == "SEARCH_STARTED"
    assert records[-1]["event_type"] == "SEARCH_FINISHED"
    assert records[0]["payload"]["start"] == [0, 0]
    assert all(r["message"] != "after close" for r in records)


def test_to_dict_uses_enum_name() -> None:
    evt = MonitoringEvent(
        ts=1.0,
        module="m",
        event_type=EventType.CELL_RELAXED,
        message="x",
        payload={"f": 1.5},
    )
    assert evt.to_dict()["event_type"] == "CELL_RELAXED"
    assert evt.to_dict()["correlation_id"] is None


def test_configure_logging_does_not_duplicate_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)

    configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)

    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_configure_logging_sets_search_logger_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])
    for name in ("gridsearch", "env"):
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)

    configure_logging(logging.DEBUG, search_level=logging.WARNING)

    # root already configured: handlers untouched, search loggers still set
    assert root.handlers == [existing]
    assert logging.getLogger("gridsearch").level == logging.WARNING
    assert logging.getLogger("env").level == logging.WARNING
    assert logging.getLogger("gridsearch.engine").getEffectiveLevel() == logging.WARNING
