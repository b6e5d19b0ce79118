"""Date picker widget tying selectability, completion and popup state together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime

from datepicker_core.accessibility import clear_control_patch
from datepicker_core.actions import PendingAction, ValueCommit
from datepicker_core.completion import (
    DateRange,
    PickedValue,
    Selection,
    SelectionMode,
    on_value_picked,
)
from datepicker_core.config import DatePickerConfig
from datepicker_core.display_format import shows_time_only
from datepicker_core.popup import (
    InteractionTarget,
    PopupInteractionController,
    PopupState,
    Transition,
)
from datepicker_core.selectability import SelectabilityResolver
from datepicker_core.timeofday import TimeLike, remove_time

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WidgetUpdate:
    """Outcome of one host event."""

    state: PopupState
    selection: Selection
    actions: tuple[PendingAction, ...] = ()
    rejected_by: str | None = None


class DatePickerWidget:
    """One rendered date picker: owns the selection and the popup state."""

    def __init__(
        self,
        config: DatePickerConfig,
        *,
        clock: Callable[[], datetime] = datetime.now,
        selection: Selection = None,
    ) -> None:
        self.config = config
        self.mode = config.selection_mode
        self.resolver = SelectabilityResolver.from_config(config)
        self.controller = PopupInteractionController(
            inline=config.show_inline,
            focus_delay_ms=config.focus_delay_ms,
        )
        self._clock = clock
        if selection is None and self.mode is SelectionMode.RANGE:
            selection = DateRange()
        self.selection: Selection = selection

    @property
    def state(self) -> PopupState:
        return self.controller.state

    @property
    def _log_extra(self) -> dict[str, str]:
        return {
            "widget_id": self.config.widget_id,
            "mode": self.mode.value,
            "popup_state": self.state.value,
        }

    def is_date_selectable(self, candidate: date) -> bool:
        return self.resolver.is_date_selectable(candidate)

    def is_time_selectable(self, candidate: TimeLike) -> bool:
        return self.resolver.is_time_selectable(candidate)

    def _update(
        self,
        transition: Transition | None = None,
        *,
        before: Iterable[PendingAction] = (),
        after: Iterable[PendingAction | None] = (),
    ) -> WidgetUpdate:
        actions: list[PendingAction] = list(before)
        if transition is not None:
            actions.extend(transition.actions)
        actions.extend(action for action in after if action is not None)
        return WidgetUpdate(state=self.state, selection=self.selection, actions=tuple(actions))

    def _rejection(self, picked: PickedValue, *, check_time: bool = True) -> str | None:
        if picked is None:
            return None
        if isinstance(picked, DateRange):
            values: tuple[date | None, ...] = (picked.start, picked.end)
        elif isinstance(picked, tuple):
            values = picked
        else:
            values = (picked,)

        check_dates = not shows_time_only(self.config.date_format)
        for value in values:
            if value is None:
                continue
            if check_dates:
                reason = self.resolver.date_rejection(value)
                if reason is not None:
                    return reason
            if check_time and isinstance(value, datetime):
                reason = self.resolver.time_rejection(value)
                if reason is not None:
                    return reason
        return None

    def pick(self, picked: PickedValue) -> WidgetUpdate:
        """Handle a value chosen in the calendar, time list or input."""

        return self._apply_pick(picked, check_time=True)

    def _apply_pick(self, picked: PickedValue, *, check_time: bool) -> WidgetUpdate:
        if self.config.readonly:
            return self._update()

        reason = self._rejection(picked, check_time=check_time)
        if reason is not None:
            _LOGGER.debug("Rejected pick %r (%s)", picked, reason, extra=self._log_extra)
            return WidgetUpdate(state=self.state, selection=self.selection, rejected_by=reason)

        result = on_value_picked(self.mode, self.selection, picked)
        self.selection = result.new_selection
        _LOGGER.debug(
            "Picked %r, complete=%s",
            picked,
            result.is_complete,
            extra=self._log_extra,
        )
        transition = self.controller.on_value_committed(result.is_complete)
        return self._update(
            transition,
            before=(ValueCommit(self.selection),),
            after=(clear_control_patch(self.config, self.selection),),
        )

    def today(self) -> WidgetUpdate:
        """Pick the current date at midnight through the regular pick pipeline.

        Only the date rules are consulted; the zeroed time-of-day is exempt
        from time bounds and time lists.
        """

        return self._apply_pick(remove_time(self._clock()), check_time=False)

    def clear(self) -> WidgetUpdate:
        return self.pick(None)

    def trigger(self) -> WidgetUpdate:
        if self.config.readonly or not self.config.show_icon:
            return self._update()
        return self._update(self.controller.on_trigger_button_activated())

    def key(self, key: str) -> WidgetUpdate:
        if self.config.readonly:
            return self._update()
        return self._update(self.controller.on_key(key))

    def input_click(self) -> WidgetUpdate:
        if self.config.readonly:
            return self._update()
        return self._update(self.controller.on_input_click())

    def outside_interaction(self, target: InteractionTarget) -> WidgetUpdate:
        return self._update(self.controller.on_outside_interaction(target))

    def focus_left_region(self) -> WidgetUpdate:
        return self._update(self.controller.on_tab_out())
