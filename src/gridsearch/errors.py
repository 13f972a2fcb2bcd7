# src/gridsearch/errors.py
"""
Error taxonomy for gridsearch.

Configuration problems (bad positions, missing endpoints) are raised at the
boundary before any search work begins. An unreachable goal is NOT an error;
it is reported as SearchStatus.EXHAUSTED on the SearchResult.
"""

from __future__ import annotations


class GridSearchError(Exception):
    """Base class for all gridsearch errors."""


class InvalidPositionError(GridSearchError, ValueError):
    """A start, goal or obstacle position lies outside [0, S) x [0, S)."""


class EmptyFrontierError(GridSearchError, IndexError):
    """pop_min() was called on an empty frontier."""


class MissingEndpointError(GridSearchError, ValueError):
    """A search was triggered before both start and goal were set."""


class SearchInProgressError(GridSearchError, RuntimeError):
    """run() was re-entered while a search on the same engine is running."""


class AuthoringError(GridSearchError):
    """An authoring session received input after it already finished."""
