"""Test package marker.

What:
  Marks ``tests`` as a package so the shared fixtures in ``tests/conftest.py``
  import deterministically.

Invariants & Safety:
  - Importing ``tests`` has no side effects.
"""
