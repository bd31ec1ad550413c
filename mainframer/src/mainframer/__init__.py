"""
Module: mainframer.__init__

What:
  Aggregate package exports for the mainframer configuration loader.

Interfaces:
  - config: Document adapter, translator, models and file loader.
  - utils: Shared logging helpers.
"""

__all__ = [
    "config",
    "utils",
]
