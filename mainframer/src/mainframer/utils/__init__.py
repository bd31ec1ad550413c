"""Shared helpers for mainframer packages.

Interfaces:
  ``JsonLogger`` and ``get_logger`` from :mod:`mainframer.utils.logging`.
"""

from .logging import JsonLogger, get_logger

__all__ = [
    "JsonLogger",
    "get_logger",
]
