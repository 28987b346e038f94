"""Centralized logging helpers.

Provides the root logger setup used by the CLI, a formatter that renders
structured context passed through ``extra=``, and small helpers for keeping
secrets out of log lines.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

# Attributes rendered by ContextFormatter when present on a record
CONTEXT_FIELDS = (
    "event",
    "component",
    "action",
    "outcome",
    "package_manager",
    "target",
    "status_code",
    "attempt",
    "duration_ms",
    "count",
    "context",
)

SENSITIVE_KEYS = ("token", "key", "secret", "password", "auth", "signature")
REDACTED = "***"

_TOKEN_PATTERN = re.compile(
    r"(gh[pousr]_[A-Za-z0-9]{16,}|glpat-[A-Za-z0-9_\-]{16,}|Bearer\s+[A-Za-z0-9._\-]+)"
)


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        parts = []
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                parts.append(f"{name}={value}")
        if not parts:
            return base
        return f"{base} | {' '.join(parts)}"


def configure_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Level name; falls back to PODFETCH_LOG_LEVEL, then INFO.
        logfile: Optional path that receives a copy of all log records.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, None)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = ContextFormatter(Constants.LOG_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(level_value)
    # Third-party chatter stays at WARNING unless explicitly debugging
    if level_value > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def redact(text: Optional[str]) -> str:
    """Mask access tokens embedded in free text."""
    if not text:
        return ""
    return _TOKEN_PATTERN.sub(REDACTED, str(text))


def safe_url(url: Optional[str]) -> str:
    """Return ``url`` with credentials removed and secret query values masked."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)

    netloc = parts.netloc
    if "@" in netloc:
        netloc = netloc.rsplit("@", 1)[1]

    query = parts.query
    if query:
        pairs = []
        for key, value in parse_qsl(query, keep_blank_values=True):
            if any(s in key.lower() for s in SENSITIVE_KEYS):
                value = REDACTED
            pairs.append((key, value))
        query = urlencode(pairs, safe="*")

    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


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

    def duration_ms(self) -> int:
        """Elapsed milliseconds; still running timers report time so far."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
