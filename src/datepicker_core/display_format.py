"""Display-format analysis used to decide which picker views are active."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Final


class DateFormat(StrEnum):
    """Display formats offered by the host form builder."""

    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    CUSTOM = "custom"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class PickerView(StrEnum):
    """Granularity of the popup the renderer should show."""

    DAY = "day"
    TIME = "time"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


# Quoted literals are skipped; any other run of a time letter is a token.
_PATTERN_TOKENS: Final[re.Pattern[str]] = re.compile(r"'(?:[^']|'')*'|([hHkKmsa])\1*")
_TIME_PRESENCE_LETTERS: Final[frozenset[str]] = frozenset("hHkKma")

_VIEW_BY_FORMAT: Final[dict[DateFormat, PickerView]] = {
    DateFormat.TIME: PickerView.TIME,
    DateFormat.MONTH: PickerView.MONTH,
    DateFormat.QUARTER: PickerView.QUARTER,
    DateFormat.YEAR: PickerView.YEAR,
}


def _time_tokens(pattern: str) -> list[re.Match[str]]:
    return [match for match in _PATTERN_TOKENS.finditer(pattern) if match.group(1)]


def contains_time(pattern: str) -> bool:
    """Return True when the pattern renders an hour, minute or am/pm marker."""

    return any(match.group(1) in _TIME_PRESENCE_LETTERS for match in _time_tokens(pattern))


def extract_time_format(pattern: str) -> str | None:
    """Return the slice of ``pattern`` spanning its time tokens.

    ``"MM/dd/yyyy h:mm aa"`` yields ``"h:mm aa"``. Patterns without a time
    component yield ``None``.
    """

    if not contains_time(pattern):
        return None
    tokens = _time_tokens(pattern)
    return pattern[tokens[0].start() : tokens[-1].end()]


def shows_time_select(date_format: DateFormat, pattern: str) -> bool:
    if date_format in (DateFormat.TIME, DateFormat.DATETIME):
        return True
    return date_format is DateFormat.CUSTOM and contains_time(pattern)


def shows_time_only(date_format: DateFormat) -> bool:
    return date_format is DateFormat.TIME


def picker_view(date_format: DateFormat) -> PickerView:
    """Map a display format onto the popup view it needs."""

    return _VIEW_BY_FORMAT.get(date_format, PickerView.DAY)
