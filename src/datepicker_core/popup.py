"""Popup open/close state machine and its focus hand-offs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from datepicker_core.actions import (
    DEFAULT_DELAY_MS,
    FocusRequest,
    FocusTarget,
    PendingAction,
    RegionFocusCheck,
)

_LOGGER = logging.getLogger(__name__)

KEY_SPACE = " "
KEY_ESCAPE = "Escape"
KEY_TAB = "Tab"


class PopupState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"


class InteractionTarget(StrEnum):
    """Where a pointer interaction outside the input landed."""

    TRIGGER_BUTTON = "trigger_button"
    POPUP = "popup"
    ELSEWHERE = "elsewhere"


@dataclass(frozen=True, slots=True)
class Transition:
    """Resulting state plus the side effects the host should carry out."""

    state: PopupState
    actions: tuple[PendingAction, ...] = ()


class PopupInteractionController:
    """Owns the popup state for one rendered widget.

    Calls that make no sense in the current state (closing a closed popup,
    escaping while closed) return a transition with no actions and leave the
    state untouched.
    """

    def __init__(self, *, inline: bool = False, focus_delay_ms: int = DEFAULT_DELAY_MS) -> None:
        self.inline = inline
        self.focus_delay_ms = focus_delay_ms
        self.state = PopupState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is PopupState.OPEN

    def _stay(self) -> Transition:
        return Transition(self.state)

    def _move(self, state: PopupState, *actions: PendingAction) -> Transition:
        _LOGGER.debug(
            "Popup %s -> %s",
            self.state.value,
            state.value,
            extra={"popup_state": state.value},
        )
        self.state = state
        return Transition(state, actions)

    def _focus(self, target: FocusTarget) -> FocusRequest:
        return FocusRequest(target=target, delay_ms=self.focus_delay_ms)

    def request_open(self) -> Transition:
        if self.is_open:
            return self._stay()
        return self._move(PopupState.OPEN, self._focus(FocusTarget.FIRST_CALENDAR_CONTROL))

    def request_close(self) -> Transition:
        if not self.is_open:
            return self._stay()
        if self.inline:
            return self._move(PopupState.CLOSED)
        return self._move(PopupState.CLOSED, self._focus(FocusTarget.INPUT_FIELD))

    def on_value_committed(self, is_complete: bool) -> Transition:
        if is_complete:
            return self.request_close()
        return self._stay()

    def on_input_click(self) -> Transition:
        # Focus stays in the input so the user can keep typing.
        if self.is_open:
            return self._stay()
        return self._move(PopupState.OPEN)

    def on_key_space(self) -> Transition:
        if self.is_open or self.inline:
            return self._stay()
        return self.request_open()

    def on_key_escape(self) -> Transition:
        return self.request_close()

    def on_key(self, key: str) -> Transition:
        """Dispatch a raw key name from the input or popup."""

        if key == KEY_SPACE:
            return self.on_key_space()
        if key == KEY_ESCAPE:
            return self.on_key_escape()
        if key == KEY_TAB:
            return Transition(self.state, (RegionFocusCheck(delay_ms=self.focus_delay_ms),))
        return self._stay()

    def on_tab_out(self) -> Transition:
        """Focus has left the control region entirely."""

        return self.request_close()

    def on_outside_interaction(self, target: InteractionTarget) -> Transition:
        if target is not InteractionTarget.ELSEWHERE:
            return self._stay()
        return self.request_close()

    def on_trigger_button_activated(self) -> Transition:
        if self.inline:
            return self._stay()
        if self.is_open:
            return self._move(PopupState.CLOSED, self._focus(FocusTarget.TRIGGER_BUTTON))
        return self._move(PopupState.OPEN, self._focus(FocusTarget.FIRST_CALENDAR_CONTROL))
