"""Side-effect requests handed from the core to the hosting UI layer.

The core never touches a UI tree. State transitions return these values and
the host schedules them, honoring ``delay_ms`` so that focus moves and
attribute patches land after the renderer has built or torn down the popup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from datepicker_core.completion import Selection

_LOGGER = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 100


class FocusTarget(StrEnum):
    TRIGGER_BUTTON = "trigger_button"
    INPUT_FIELD = "input_field"
    FIRST_CALENDAR_CONTROL = "first_calendar_control"


class ElementRef(StrEnum):
    """Elements owned by the renderer that deferred patches may target."""

    CLEAR_CONTROL = "clear_control"
    REGION = "region"


@dataclass(frozen=True, slots=True)
class FocusRequest:
    target: FocusTarget
    delay_ms: int = DEFAULT_DELAY_MS


@dataclass(frozen=True, slots=True)
class AttributePatch:
    element: ElementRef
    attributes: Mapping[str, str] = field(default_factory=dict)
    delay_ms: int = DEFAULT_DELAY_MS


@dataclass(frozen=True, slots=True)
class RegionFocusCheck:
    """Ask the host to report whether focus is still inside the control region."""

    delay_ms: int = DEFAULT_DELAY_MS


@dataclass(frozen=True, slots=True)
class ValueCommit:
    """Write ``selection`` back to the host's stored value. Runs immediately."""

    selection: Selection


PendingAction = FocusRequest | AttributePatch | RegionFocusCheck | ValueCommit

T = TypeVar("T")


def action_target(action: PendingAction) -> FocusTarget | ElementRef | None:
    """Return the UI element an action needs, or None when it needs none."""

    if isinstance(action, FocusRequest):
        return action.target
    if isinstance(action, AttributePatch):
        return action.element
    if isinstance(action, RegionFocusCheck):
        return ElementRef.REGION
    return None


def run_deferred(
    action: PendingAction,
    *,
    resolve: Callable[[FocusTarget | ElementRef], T | None],
    apply: Callable[[PendingAction, T | None], None],
) -> bool:
    """Execute ``action`` once its delay has elapsed.

    ``resolve`` looks up the live element for the action's target; returning
    None means the widget was disposed in the meantime and the action is
    dropped. Returns True when ``apply`` ran.
    """

    target_ref = action_target(action)
    if target_ref is None:
        apply(action, None)
        return True

    element = resolve(target_ref)
    if element is None:
        _LOGGER.debug("Skipping %s: target %s no longer exists", type(action).__name__, target_ref)
        return False

    apply(action, element)
    return True
