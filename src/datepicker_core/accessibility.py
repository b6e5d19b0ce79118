"""Accessibility attributes for the input, trigger button and clear control."""

from __future__ import annotations

from typing import Final

from datepicker_core.actions import AttributePatch, ElementRef
from datepicker_core.completion import DateRange, Selection
from datepicker_core.config import DatePickerConfig

_PLACEMENTS: Final[dict[str, str]] = {
    "left": "bottom-start",
    "right": "bottom-end",
    "auto": "auto",
}


def _has_selection(selection: Selection) -> bool:
    if isinstance(selection, DateRange):
        return not selection.is_empty
    return selection is not None


def clear_control_patch(config: DatePickerConfig, selection: Selection) -> AttributePatch | None:
    """Patch making the renderer's clear control focusable and labelled.

    The clear control only exists while something is selected, so the patch
    is deferred and skipped entirely when there is nothing to clear.
    """

    if not config.clearable or not _has_selection(selection):
        return None
    return AttributePatch(
        element=ElementRef.CLEAR_CONTROL,
        attributes={
            "tabIndex": str(config.tab_index),
            "aria-label": config.clear_button_label,
        },
        delay_ms=config.focus_delay_ms,
    )


def input_attributes(config: DatePickerConfig, *, invalid: bool = False) -> dict[str, str]:
    return {
        "id": config.widget_id,
        "aria-labelledby": f"{config.widget_id}-label",
        "aria-invalid": "true" if invalid else "false",
        "aria-required": "true" if config.required else "false",
        "tabIndex": str(config.tab_index),
        "autocomplete": "off",
    }


def trigger_button_attributes(config: DatePickerConfig) -> dict[str, str] | None:
    """Attributes for the calendar toggle button, or None when it is not rendered."""

    if config.show_inline or not config.show_icon:
        return None
    return {
        "title": config.calendar_icon_label,
        "aria-label": config.calendar_icon_label,
        "aria-controls": config.widget_id,
        "aria-haspopup": "true",
        # Inside the input the button is reachable through the input itself.
        "tabIndex": "-1" if config.show_icon_inside else str(config.tab_index),
    }


def today_button_attributes(config: DatePickerConfig) -> dict[str, str] | None:
    if not config.show_today_button:
        return None
    return {
        "aria-label": f"{config.select_prefix} {config.today_button_text}",
        "tabIndex": str(config.tab_index),
    }


def popper_placement(alignment: str) -> str:
    return _PLACEMENTS.get(alignment, "auto")


def mask_pattern(config: DatePickerConfig) -> str | None:
    """Display pattern handed to the input-mask engine, when masking is enabled."""

    return config.date_pattern if config.mask_input else None
