# src/monitoring/__init__.py
"""
Monitoring for gridsearch runs: events, an in-process bus, a JSONL logger
and the logging setup used by entrypoints.
"""

from __future__ import annotations

from .bus import EventBus
from .events import EventType, MonitoringEvent
from .logger import JsonFileLogger, log_event
from .logging_config import configure_logging

__all__ = [
    "EventBus",
    "EventType",
    "MonitoringEvent",
    "JsonFileLogger",
    "log_event",
    "configure_logging",
]
