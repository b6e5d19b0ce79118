"""Rules deciding when a pick finishes the user's selection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from datepicker_core.timeofday import as_date, times_match


class SelectionMode(StrEnum):
    SINGLE = "single"
    SINGLE_WITH_TIME = "single_with_time"
    RANGE = "range"


@dataclass(frozen=True, slots=True)
class DateRange:
    """Range selection; ``end`` is only ever set alongside ``start``."""

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_closed(self) -> bool:
        return self.start is not None and self.end is not None

    @classmethod
    def ordered(cls, first: date, second: date) -> DateRange:
        if as_date(second) < as_date(first):
            return cls(start=second, end=first)
        return cls(start=first, end=second)


Selection = date | DateRange | None
PickedValue = date | tuple[date | None, date | None] | DateRange | None


@dataclass(frozen=True, slots=True)
class CompletionResult:
    new_selection: Selection
    is_complete: bool


def on_value_picked(
    mode: SelectionMode,
    previous: Selection,
    picked: PickedValue,
) -> CompletionResult:
    """Apply ``picked`` to ``previous`` and report whether the selection is finished.

    Clearing (``picked is None``) always completes. Single dates complete
    immediately. Date+time picks complete on the first pick or when the
    time-of-day changes, so the popup stays open while the user moves around
    the calendar. Ranges complete on any pick made once a start exists.
    """

    if picked is None:
        return CompletionResult(
            new_selection=DateRange() if mode is SelectionMode.RANGE else None,
            is_complete=True,
        )
    if mode is SelectionMode.RANGE:
        return _pick_range(previous, picked)
    if isinstance(picked, DateRange | tuple):
        raise TypeError(f"{mode.value} selection expects a single date, got {picked!r}")
    if mode is SelectionMode.SINGLE:
        return CompletionResult(new_selection=picked, is_complete=True)

    if not isinstance(previous, date):
        return CompletionResult(new_selection=picked, is_complete=True)
    return CompletionResult(new_selection=picked, is_complete=not times_match(picked, previous))


def _pick_range(previous: Selection, picked: PickedValue) -> CompletionResult:
    current = previous if isinstance(previous, DateRange) else DateRange()

    if isinstance(picked, DateRange | tuple):
        start, end = (picked.start, picked.end) if isinstance(picked, DateRange) else picked
        if start is None or end is None:
            pair = DateRange(start=start if start is not None else end)
            return CompletionResult(new_selection=pair, is_complete=current.start is not None)
        return CompletionResult(
            new_selection=DateRange.ordered(start, end),
            is_complete=current.start is not None,
        )

    if current.start is not None and current.end is None:
        return CompletionResult(
            new_selection=DateRange.ordered(current.start, picked),
            is_complete=True,
        )
    # A pick after a closed range restarts it and completes.
    return CompletionResult(
        new_selection=DateRange(start=picked),
        is_complete=current.start is not None,
    )
