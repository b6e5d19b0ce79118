"""Selectability rules and popup interaction logic for a form date picker."""

from __future__ import annotations

__version__ = "0.1.0"
