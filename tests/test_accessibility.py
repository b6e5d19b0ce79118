"""Tests for accessibility attribute helpers."""

from __future__ import annotations

from datetime import date

import pytest

from datepicker_core.accessibility import (
    clear_control_patch,
    input_attributes,
    mask_pattern,
    popper_placement,
    today_button_attributes,
    trigger_button_attributes,
)
from datepicker_core.actions import ElementRef
from datepicker_core.completion import DateRange
from datepicker_core.config import DatePickerConfig


def test_clear_control_patch_sets_tab_index_and_label() -> None:
    config = DatePickerConfig(tab_index=3, clear_button_label="Wis datum", focus_delay_ms=80)

    patch = clear_control_patch(config, date(2024, 3, 10))

    assert patch is not None
    assert patch.element is ElementRef.CLEAR_CONTROL
    assert dict(patch.attributes) == {"tabIndex": "3", "aria-label": "Wis datum"}
    assert patch.delay_ms == 80


@pytest.mark.parametrize("selection", [None, DateRange()])
def test_clear_control_patch_skipped_without_selection(selection: DateRange | None) -> None:
    assert clear_control_patch(DatePickerConfig(), selection) is None


def test_clear_control_patch_skipped_when_not_clearable() -> None:
    assert clear_control_patch(DatePickerConfig(clearable=False), date(2024, 3, 10)) is None


def test_clear_control_patch_for_half_open_range() -> None:
    assert clear_control_patch(DatePickerConfig(), DateRange(start=date(2024, 3, 10))) is not None


def test_input_attributes_reflect_required_and_invalid() -> None:
    attributes = input_attributes(DatePickerConfig(widget_id="dob", required=True), invalid=True)

    assert attributes["aria-labelledby"] == "dob-label"
    assert attributes["aria-required"] == "true"
    assert attributes["aria-invalid"] == "true"
    assert attributes["autocomplete"] == "off"


def test_trigger_button_attributes() -> None:
    attributes = trigger_button_attributes(DatePickerConfig(widget_id="dob", tab_index=2))

    assert attributes is not None
    assert attributes["aria-controls"] == "dob"
    assert attributes["aria-haspopup"] == "true"
    assert attributes["tabIndex"] == "2"


def test_trigger_button_inside_input_is_not_tabbable() -> None:
    attributes = trigger_button_attributes(DatePickerConfig(show_icon_inside=True))
    assert attributes is not None
    assert attributes["tabIndex"] == "-1"


def test_trigger_button_absent_inline_or_without_icon() -> None:
    assert trigger_button_attributes(DatePickerConfig(show_inline=True)) is None
    assert trigger_button_attributes(DatePickerConfig(show_icon=False)) is None


def test_today_button_attributes() -> None:
    assert today_button_attributes(DatePickerConfig()) is None
    attributes = today_button_attributes(DatePickerConfig(show_today_button=True))
    assert attributes is not None
    assert attributes["aria-label"] == "Select Today"


@pytest.mark.parametrize(
    ("alignment", "expected"),
    [("left", "bottom-start"), ("right", "bottom-end"), ("auto", "auto")],
)
def test_popper_placement(alignment: str, expected: str) -> None:
    assert popper_placement(alignment) == expected


def test_mask_pattern_only_when_masking() -> None:
    assert mask_pattern(DatePickerConfig(date_pattern="dd-MM-yyyy")) is None
    assert mask_pattern(DatePickerConfig(date_pattern="dd-MM-yyyy", mask_input=True)) == "dd-MM-yyyy"
