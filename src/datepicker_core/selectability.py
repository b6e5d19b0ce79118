"""Selectability rules for candidate dates and times.

Each rule is a small predicate over the candidate and a read-only constraint
bundle. The predicates run in a fixed order and evaluation stops at the first
one that rejects the candidate:

1. ``weekday``: the day-of-week mask.
2. ``bounds``: the inclusive min/max date window.
3. ``specific_days``: the include/exclude list of exact dates.
4. ``intervals``: the include/exclude list of inclusive date intervals.

Times follow the same scheme with ``bounds`` then ``specific_times``, comparing
only the time-of-day.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, time
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from datepicker_core.timeofday import TimeLike, as_date, compare_time, times_match

if TYPE_CHECKING:
    from datepicker_core.config import DatePickerConfig

_LOGGER = logging.getLogger(__name__)


class RuleMode(StrEnum):
    """How a rule's list is applied."""

    NONE = "none"
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True, slots=True)
class DayOfWeekMask:
    """Weekdays that are never selectable."""

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    def is_masked(self, candidate: date) -> bool:
        flags = (
            self.monday,
            self.tuesday,
            self.wednesday,
            self.thursday,
            self.friday,
            self.saturday,
            self.sunday,
        )
        return flags[candidate.weekday()]


@dataclass(frozen=True, slots=True)
class SpecificDaysRule:
    mode: RuleMode = RuleMode.NONE
    days: frozenset[date] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", frozenset(as_date(day) for day in self.days))


@dataclass(frozen=True, slots=True)
class DateInterval:
    """Inclusive date interval. An interval whose start is after its end is empty."""

    start: date
    end: date

    def contains(self, candidate: date) -> bool:
        return as_date(self.start) <= as_date(candidate) <= as_date(self.end)


@dataclass(frozen=True, slots=True)
class IntervalsRule:
    mode: RuleMode = RuleMode.NONE
    intervals: tuple[DateInterval, ...] = ()

    def covers(self, candidate: date) -> bool:
        return any(interval.contains(candidate) for interval in self.intervals)


@dataclass(frozen=True, slots=True)
class SpecificTimesRule:
    mode: RuleMode = RuleMode.NONE
    times: tuple[time, ...] = ()

    def lists(self, candidate: TimeLike) -> bool:
        return any(times_match(candidate, listed) for listed in self.times)


@dataclass(frozen=True, slots=True)
class DateBounds:
    min_date: date | None = None
    max_date: date | None = None


@dataclass(frozen=True, slots=True)
class TimeBounds:
    min_time: time | None = None
    max_time: time | None = None


@dataclass(frozen=True, slots=True)
class DateConstraints:
    """Everything consulted when deciding whether a date is pickable."""

    day_mask: DayOfWeekMask = field(default_factory=DayOfWeekMask)
    specific_days: SpecificDaysRule = field(default_factory=SpecificDaysRule)
    intervals: IntervalsRule = field(default_factory=IntervalsRule)
    bounds: DateBounds = field(default_factory=DateBounds)


@dataclass(frozen=True, slots=True)
class TimeConstraints:
    specific_times: SpecificTimesRule = field(default_factory=SpecificTimesRule)
    bounds: TimeBounds = field(default_factory=TimeBounds)


DateCheck = Callable[[date, DateConstraints], bool]
TimeCheck = Callable[[TimeLike, TimeConstraints], bool]


def _passes_day_mask(candidate: date, constraints: DateConstraints) -> bool:
    return not constraints.day_mask.is_masked(candidate)


def _passes_date_bounds(candidate: date, constraints: DateConstraints) -> bool:
    day = as_date(candidate)
    bounds = constraints.bounds
    if bounds.min_date is not None and day < as_date(bounds.min_date):
        return False
    if bounds.max_date is not None and day > as_date(bounds.max_date):
        return False
    return True


def _passes_specific_days(candidate: date, constraints: DateConstraints) -> bool:
    rule = constraints.specific_days
    if rule.mode is RuleMode.INCLUDE:
        return as_date(candidate) in rule.days
    if rule.mode is RuleMode.EXCLUDE:
        return as_date(candidate) not in rule.days
    return True


def _passes_intervals(candidate: date, constraints: DateConstraints) -> bool:
    rule = constraints.intervals
    if rule.mode is RuleMode.INCLUDE:
        return rule.covers(candidate)
    if rule.mode is RuleMode.EXCLUDE:
        return not rule.covers(candidate)
    return True


def _passes_time_bounds(candidate: TimeLike, constraints: TimeConstraints) -> bool:
    bounds = constraints.bounds
    if bounds.min_time is not None and compare_time(candidate, bounds.min_time) < 0:
        return False
    if bounds.max_time is not None and compare_time(candidate, bounds.max_time) > 0:
        return False
    return True


def _passes_specific_times(candidate: TimeLike, constraints: TimeConstraints) -> bool:
    rule = constraints.specific_times
    if rule.mode is RuleMode.INCLUDE:
        return rule.lists(candidate)
    if rule.mode is RuleMode.EXCLUDE:
        return not rule.lists(candidate)
    return True


DATE_RULE_CHAIN: Final[tuple[tuple[str, DateCheck], ...]] = (
    ("weekday", _passes_day_mask),
    ("bounds", _passes_date_bounds),
    ("specific_days", _passes_specific_days),
    ("intervals", _passes_intervals),
)

TIME_RULE_CHAIN: Final[tuple[tuple[str, TimeCheck], ...]] = (
    ("bounds", _passes_time_bounds),
    ("specific_times", _passes_specific_times),
)


def first_failed_date_rule(candidate: date, constraints: DateConstraints) -> str | None:
    """Return the name of the first rule rejecting ``candidate``, or None."""

    for name, check in DATE_RULE_CHAIN:
        if not check(candidate, constraints):
            return name
    return None


def first_failed_time_rule(candidate: TimeLike, constraints: TimeConstraints) -> str | None:
    for name, check in TIME_RULE_CHAIN:
        if not check(candidate, constraints):
            return name
    return None


def is_date_selectable(
    candidate: date,
    day_mask: DayOfWeekMask,
    specific_days: SpecificDaysRule,
    intervals: IntervalsRule,
    bounds: DateBounds,
) -> bool:
    constraints = DateConstraints(
        day_mask=day_mask,
        specific_days=specific_days,
        intervals=intervals,
        bounds=bounds,
    )
    return first_failed_date_rule(candidate, constraints) is None


def is_time_selectable(
    candidate: TimeLike,
    specific_times: SpecificTimesRule,
    bounds: TimeBounds,
) -> bool:
    constraints = TimeConstraints(specific_times=specific_times, bounds=bounds)
    return first_failed_time_rule(candidate, constraints) is None


class SelectabilityResolver:
    """Answers per-cell selectability queries for one configured widget."""

    def __init__(
        self,
        date_constraints: DateConstraints,
        time_constraints: TimeConstraints,
        *,
        time_active: bool,
    ) -> None:
        self.date_constraints = date_constraints
        self.time_constraints = time_constraints
        self.time_active = time_active

    @classmethod
    def from_config(cls, config: DatePickerConfig) -> SelectabilityResolver:
        return cls(
            config.date_constraints(),
            config.time_constraints(),
            time_active=config.shows_time_select,
        )

    def is_date_selectable(self, candidate: date) -> bool:
        return self.date_rejection(candidate) is None

    def is_time_selectable(self, candidate: TimeLike) -> bool:
        return self.time_rejection(candidate) is None

    def date_rejection(self, candidate: date) -> str | None:
        return first_failed_date_rule(candidate, self.date_constraints)

    def time_rejection(self, candidate: TimeLike) -> str | None:
        """Name the time rule rejecting ``candidate``; time rules are inert without a time view."""

        if not self.time_active:
            return None
        return first_failed_time_rule(candidate, self.time_constraints)

    def selectable_dates(self, candidates: Iterable[date]) -> list[date]:
        selectable = [day for day in candidates if self.is_date_selectable(day)]
        _LOGGER.debug("%s of the candidate dates are selectable", len(selectable))
        return selectable
