"""Time-of-day helpers that ignore the date portion of a value."""

from __future__ import annotations

from datetime import date, datetime, time

TimeLike = datetime | time | date


def time_of_day(value: TimeLike) -> time:
    """Return the time portion of a value; bare dates are treated as midnight."""

    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    return time(0, 0)


def _minute_key(value: TimeLike) -> tuple[int, int]:
    moment = time_of_day(value)
    return moment.hour, moment.minute


def times_match(left: TimeLike, right: TimeLike) -> bool:
    """Return True when both values share the same hour and minute."""

    return _minute_key(left) == _minute_key(right)


def compare_time(left: TimeLike, right: TimeLike) -> int:
    """Three-way comparison of time-of-day at minute granularity."""

    left_key = _minute_key(left)
    right_key = _minute_key(right)
    if left_key == right_key:
        return 0
    return -1 if left_key < right_key else 1


def as_date(value: date) -> date:
    """Project a date or datetime onto its calendar date."""

    if isinstance(value, datetime):
        return value.date()
    return value


def remove_time(value: date) -> datetime:
    """Return the same calendar date with the time-of-day zeroed."""

    day = as_date(value)
    return datetime(day.year, day.month, day.day)
