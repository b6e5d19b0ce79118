"""End-to-end tests for the date picker widget."""

from __future__ import annotations

from datetime import date, datetime, time

from datepicker_core.actions import AttributePatch, FocusRequest, FocusTarget, ValueCommit
from datepicker_core.completion import DateRange, SelectionMode, on_value_picked
from datepicker_core.config import DatePickerConfig
from datepicker_core.display_format import DateFormat
from datepicker_core.popup import InteractionTarget, PopupState
from datepicker_core.widget import DatePickerWidget


def _fixed_clock() -> datetime:
    return datetime(2024, 3, 12, 15, 42, 7)


def test_range_scenario_closes_after_end_pick() -> None:
    widget = DatePickerWidget(DatePickerConfig(selection_type="range"))
    widget.trigger()

    first = widget.pick(date(2024, 3, 10))

    assert first.selection == DateRange(start=date(2024, 3, 10), end=None)
    assert first.state is PopupState.OPEN
    assert first.actions[0] == ValueCommit(DateRange(start=date(2024, 3, 10)))

    second = widget.pick(date(2024, 3, 15))

    assert second.selection == DateRange(start=date(2024, 3, 10), end=date(2024, 3, 15))
    assert second.state is PopupState.CLOSED
    assert FocusRequest(FocusTarget.INPUT_FIELD) in second.actions


def test_single_pick_closes_and_patches_clear_control() -> None:
    widget = DatePickerWidget(DatePickerConfig())
    widget.key(" ")

    update = widget.pick(date(2024, 3, 10))

    assert update.state is PopupState.CLOSED
    assert update.selection == date(2024, 3, 10)
    assert isinstance(update.actions[-1], AttributePatch)


def test_datetime_widget_stays_open_while_only_date_changes() -> None:
    config = DatePickerConfig(date_format=DateFormat.DATETIME)
    widget = DatePickerWidget(config, selection=datetime(2024, 3, 10, 9, 30))
    widget.input_click()

    moved = widget.pick(datetime(2024, 3, 11, 9, 30))
    timed = widget.pick(datetime(2024, 3, 11, 10, 0))

    assert widget.mode is SelectionMode.SINGLE_WITH_TIME
    assert moved.state is PopupState.OPEN
    assert timed.state is PopupState.CLOSED


def test_today_zeroes_time_and_matches_manual_pick() -> None:
    config = DatePickerConfig(date_format=DateFormat.DATETIME)
    previous = datetime(2024, 3, 1, 0, 0)
    widget = DatePickerWidget(config, clock=_fixed_clock, selection=previous)
    widget.trigger()

    update = widget.today()
    manual = on_value_picked(widget.mode, previous, datetime(2024, 3, 12))

    assert update.selection == datetime(2024, 3, 12, 0, 0)
    assert update.selection == manual.new_selection
    # Same time-of-day as the previous value, so the popup stays open.
    assert update.state is PopupState.OPEN
    assert manual.is_complete is False


def test_today_in_range_mode_starts_range() -> None:
    widget = DatePickerWidget(DatePickerConfig(selection_type="range"), clock=_fixed_clock)

    update = widget.today()

    assert update.selection == DateRange(start=datetime(2024, 3, 12))


def test_unselectable_pick_is_rejected_without_state_change() -> None:
    widget = DatePickerWidget(DatePickerConfig(disable_sunday=True))
    widget.trigger()

    update = widget.pick(date(2024, 3, 10))

    assert update.rejected_by == "weekday"
    assert update.selection is None
    assert update.state is PopupState.OPEN
    assert update.actions == ()


def test_time_rules_reject_datetime_picks() -> None:
    config = DatePickerConfig(date_format=DateFormat.DATETIME, min_time=time(9, 0))
    widget = DatePickerWidget(config)

    assert widget.pick(datetime(2024, 3, 11, 8, 0)).rejected_by == "bounds"
    assert not widget.is_time_selectable(time(8, 0))
    assert widget.is_date_selectable(date(2024, 3, 11))


def test_time_only_widget_skips_date_rules() -> None:
    config = DatePickerConfig(date_format=DateFormat.TIME, disable_monday=True)
    widget = DatePickerWidget(config)

    update = widget.pick(datetime(2024, 3, 11, 10, 0))

    assert widget.mode is SelectionMode.SINGLE
    assert update.rejected_by is None


def test_readonly_widget_ignores_events() -> None:
    widget = DatePickerWidget(DatePickerConfig(readonly=True))

    assert widget.trigger().state is PopupState.CLOSED
    assert widget.key(" ").state is PopupState.CLOSED
    assert widget.input_click().state is PopupState.CLOSED
    assert widget.pick(date(2024, 3, 11)).selection is None


def test_clear_empties_selection_and_commits() -> None:
    widget = DatePickerWidget(DatePickerConfig(), selection=date(2024, 3, 11))

    update = widget.clear()

    assert update.selection is None
    assert update.actions == (ValueCommit(None),)


def test_outside_interaction_and_focus_loss_close() -> None:
    widget = DatePickerWidget(DatePickerConfig())
    widget.trigger()

    assert widget.outside_interaction(InteractionTarget.TRIGGER_BUTTON).state is PopupState.OPEN
    assert widget.focus_left_region().state is PopupState.CLOSED
    assert widget.outside_interaction(InteractionTarget.ELSEWHERE).actions == ()


def test_trigger_without_icon_is_ignored() -> None:
    widget = DatePickerWidget(DatePickerConfig(show_icon=False))
    assert widget.trigger().state is PopupState.CLOSED


def test_pick_after_closed_range_restarts_and_closes_popup() -> None:
    previous = DateRange(start=date(2024, 3, 11), end=date(2024, 3, 15))
    widget = DatePickerWidget(DatePickerConfig(selection_type="range"), selection=previous)
    widget.trigger()

    update = widget.pick(date(2024, 3, 20))

    assert update.selection == DateRange(start=date(2024, 3, 20))
    assert update.state is PopupState.CLOSED
    assert FocusRequest(FocusTarget.INPUT_FIELD) in update.actions


def test_today_ignores_time_rules() -> None:
    config = DatePickerConfig(
        date_format=DateFormat.DATETIME,
        min_time=time(9, 0),
        max_time=time(17, 0),
    )
    widget = DatePickerWidget(config, clock=lambda: datetime(2024, 3, 5, 11, 0))
    widget.trigger()

    update = widget.today()

    assert update.rejected_by is None
    assert update.selection == datetime(2024, 3, 5, 0, 0)
    assert update.state is PopupState.CLOSED
    # A manual midnight pick is still held to the time bounds.
    assert widget.pick(datetime(2024, 3, 6, 0, 0)).rejected_by == "bounds"


def test_today_still_checks_date_rules() -> None:
    config = DatePickerConfig(date_format=DateFormat.DATETIME, disable_tuesday=True)
    widget = DatePickerWidget(config, clock=lambda: datetime(2024, 3, 5, 11, 0))

    assert widget.today().rejected_by == "weekday"
