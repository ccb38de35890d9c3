"""Centralized logging helpers.

Provides one place to configure the root logger, a helper for structured
``extra`` payloads, and a small timer used to attach durations to debug
records.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

# LogRecord attributes that an ``extra`` payload must not overwrite.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

# Keys extra_context() may emit, used by the formatter to render them.
_CONTEXT_KEYS = (
    "event",
    "component",
    "action",
    "outcome",
    "specifier",
    "base",
    "target",
    "count",
    "duration_ms",
)


class StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current sys.stderr."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                pairs.append(f"{key}={value}")
        for key, value in getattr(record, "ctx_extra", {}).items():
            pairs.append(f"{key}={value}")
        if not pairs:
            return base
        return f"{base} [{' '.join(pairs)}]"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once.

    The level comes from ``level`` when given, otherwise from the
    RESOLVEWITH_LOG_LEVEL environment variable, defaulting to INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not any(getattr(h, "_resolvewith_handler", False) for h in root.handlers):
        handler = StderrHandler()
        handler.setFormatter(ContextFormatter(Constants.LOG_FORMAT))
        handler._resolvewith_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for logger calls.

    None values are dropped. Keys that would clash with LogRecord
    attributes are moved under ``ctx_extra`` instead of raising.
    """
    payload: Dict[str, Any] = {}
    overflow: Dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in _RESERVED_ATTRS:
            overflow[key] = value
        else:
            payload[key] = value
    if overflow:
        payload["ctx_extra"] = overflow
    return payload


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds, measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
