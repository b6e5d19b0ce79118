"""Import smoke tests for the datepicker_core package."""

from __future__ import annotations

import importlib


def test_import_datepicker_core() -> None:
    module = importlib.import_module("datepicker_core")
    assert hasattr(module, "__version__")


def test_import_datepicker_core_logging() -> None:
    module = importlib.import_module("datepicker_core.logging")
    assert hasattr(module, "configure_logging")


def test_import_datepicker_core_cli() -> None:
    module = importlib.import_module("datepicker_core.cli")
    assert hasattr(module, "main")


def test_import_datepicker_core_widget() -> None:
    module = importlib.import_module("datepicker_core.widget")
    assert hasattr(module, "DatePickerWidget")
