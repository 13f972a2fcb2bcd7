# JSON logger subscribing to EventBus
"""
Structured event logging for search runs.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes MonitoringEvents as JSONL.
- log_event: convenience helper for publishing MonitoringEvents via the EventBus.

Usage:

    from pathlib import Path
    from monitoring.bus import EventBus
    from monitoring.logger import JsonFileLogger

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/search/events.jsonl"), bus)
    engine = SearchEngine(grid, bus=bus)
    engine.run()
    sink.close()
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent


# ============================================================
# JSONL File Logger
# ============================================================

class JsonFileLogger:
    """
    JSON-lines logger for MonitoringEvent instances.

    - Subscribes to an EventBus and writes one JSON object per line.
    - Ensures UTF-8 encoding.
    - Ensures parent directory exists.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        self._bus = bus
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        self._file.write(line + "\n")
        self._file.flush()

    def close(self) -> None:
        """Unsubscribe and close the underlying file handle."""
        self._bus.unsubscribe(self._on_event)
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> "JsonFileLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


# ============================================================
# Convenience helper for emitting events
# ============================================================

def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """
    Create and publish a MonitoringEvent.

        log_event(
            bus=self._bus,
            module="gridsearch.engine",
            event_type=EventType.CELL_EXPANDED,
            message="Expanded cell",
            payload={"position": [3, 4], "g": 30.0},
            correlation_id=run_id,
        )
    """
    event = MonitoringEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
