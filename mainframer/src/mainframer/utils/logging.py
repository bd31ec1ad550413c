"""Structured JSON logging for mainframer components.

What:
  Write one JSON object per line with a fixed set of core fields, optional
  context bound to the logger, and per-call fields.

Why:
  Build machines collect logs from many runs; a fixed layout keeps them easy
  to grep and to assert on in tests. Configuration text can contain host names
  and paths that do not belong in shared logs, so raw payloads are masked.

How:
  :class:`JsonLogger` is an immutable dataclass. :meth:`JsonLogger.bind`
  derives a logger whose ``context`` is merged into every entry, so a caller
  can attach the file path once per load. Entries pass through
  :func:`redact` before :func:`json.dumps`.

Interfaces:
  :class:`JsonLogger`, :func:`get_logger`, :func:`redact`.

Invariants & Safety:
  - Core fields (``ts``, ``lvl``, ``msg``, ``component``) cannot be
    overwritten by context or call fields.
  - Keys listed in ``SENSITIVE_KEYS`` are masked inside nested mappings and
    lists as well.
  - Streams are flushed after every entry.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping


REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"raw", "content", "text"})
LEVELS = {"info": "INFO", "warning": "WARN", "error": "ERROR"}
_CORE_FIELDS = ("ts", "lvl", "msg", "component")


def redact(value: Any) -> Any:
    """Return ``value`` with every sensitive mapping key masked."""

    if isinstance(value, Mapping):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


@dataclass(frozen=True)
class JsonLogger:
    """Emit redacted JSON lines tagged with a component name.

    Attributes:
      stream: Text stream receiving the entries.
      component: Subsystem label written to every entry.
      context: Fields repeated on every entry, set through :meth:`bind`.
    """

    stream: Any = field(default_factory=lambda: sys.stdout)
    component: str = "mainframer"
    context: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **context: Any) -> "JsonLogger":
        """Return a logger writing to the same stream with extra ``context``."""

        return replace(self, context={**self.context, **context})

    def log(self, level: str, message: str, **fields: Any) -> None:
        """Write one entry.

        Args:
          level: One of the keys of ``LEVELS``.
          message: Event name, e.g. ``config_loaded``.
          **fields: Entry-specific context; overrides bound context.

        Raises:
          ValueError: If ``level`` is unknown.
        """

        try:
            severity = LEVELS[level]
        except KeyError:
            raise ValueError(f"unknown log level {level!r}") from None
        extra = {
            key: value
            for key, value in {**self.context, **fields}.items()
            if key not in _CORE_FIELDS
        }
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "lvl": severity,
            "msg": message,
            "component": self.component,
            **redact(extra),
        }
        self.stream.write(json.dumps(entry, separators=(",", ":"), default=str) + "\n")
        self.stream.flush()

    def info(self, message: str, **fields: Any) -> None:
        self.log("info", message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log("warning", message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log("error", message, **fields)


def get_logger(component: str) -> JsonLogger:
    """Return a :class:`JsonLogger` bound to ``component`` writing to ``stdout``."""

    return JsonLogger(component=component)
