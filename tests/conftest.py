"""Pytest configuration shared by every suite.

What:
  Make the ``mainframer`` source tree importable and provide a logger fixture
  that captures structured log lines in memory.

Why:
  Tests must exercise the working tree rather than an installed wheel, and
  log assertions should not depend on ``stdout`` capture.

How:
  Prepend ``mainframer/src`` to ``sys.path`` when it exists, then expose
  :func:`log_stream` and :func:`logger` fixtures backed by :class:`io.StringIO`.

Interfaces:
  :func:`log_stream`, :func:`logger`, :func:`log_entries` (pytest fixtures).
"""

import io
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "mainframer" / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

import pytest

from mainframer.utils.logging import JsonLogger


@pytest.fixture
def log_stream():
    """Return the in-memory stream the ``logger`` fixture writes to."""

    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    """Yield a :class:`JsonLogger` writing to ``log_stream``."""

    return JsonLogger(stream=log_stream, component="test")


@pytest.fixture
def log_entries(log_stream):
    """Return a callable decoding every JSON line written so far."""

    def _entries():
        return [json.loads(line) for line in log_stream.getvalue().splitlines()]

    return _entries
