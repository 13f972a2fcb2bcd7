# path: src/monitoring/events.py
"""
Event schemas for search monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured search events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the search engine."""

    # Engine lifecycle
    SEARCH_STARTED = auto()
    SEARCH_FINISHED = auto()

    # Per-cell activity inside the A* loop
    CELL_EXPANDED = auto()
    CELL_RELAXED = auto()

    # Authoring session phase changes
    AUTHORING_PHASE_CHANGE = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the engine or an authoring session.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("gridsearch.engine", ...)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (positions, costs, status)
    correlation_id: Optional[str] = None  # Groups events of a single run

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
