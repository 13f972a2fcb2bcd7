# src/monitoring/logging_config.py
"""
Central logging configuration for gridsearch.

Call configure_logging() from your main entrypoint once, for example:

    from monitoring.logging_config import configure_logging
    configure_logging(logging.INFO, search_level=logging.WARNING)

The engine logs one DEBUG line per expanded cell, so the search loggers get
their own level: a DEBUG root can still keep `gridsearch.*` at INFO.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Loggers that carry per-run search output.
SEARCH_LOGGERS = ("gridsearch", "env")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, search_level: Optional[int] = None) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Args:
        level: root logging level (e.g., logging.INFO, logging.DEBUG)
        search_level: level for the gridsearch/env loggers; None leaves them
            inheriting from the root. Applied even when the root was already
            configured elsewhere.
    """
    if search_level is not None:
        for name in SEARCH_LOGGERS:
            logging.getLogger(name).setLevel(search_level)

    root = logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
