"""Centralized logging helpers.

Provides a single place to configure the root logger plus small utilities
used by modules emitting structured DEBUG traces: ``extra_context`` builds the
``extra=`` payload, ``is_debug_enabled`` guards expensive log calls and
``Timer`` measures durations for those traces.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome", "target", "package")


def _resolve_level(value: Optional[str]) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""
    if not value:
        return logging.INFO
    level = getattr(logging, str(value).strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level`` when given, else from the
    ``ROPE_LOG_LEVEL`` environment variable, else INFO. Calling this more than
    once only updates the level.
    """
    resolved = _resolve_level(level or os.environ.get(Constants.ENV_LOG_LEVEL))
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped. Known fields are kept at the top level so
    formatters can reference them; everything else is grouped under
    ``context``.
    """
    extra: Dict[str, Any] = {}
    context: Dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in _CONTEXT_FIELDS:
            extra[key] = value
        else:
            context[key] = value
    if context:
        extra["context"] = context
    return extra


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self):
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, up to now when still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
