"""Widget configuration models and loaders."""

from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from datepicker_core.completion import SelectionMode
from datepicker_core.display_format import DateFormat, shows_time_select
from datepicker_core.selectability import (
    DateBounds,
    DateConstraints,
    DateInterval,
    DayOfWeekMask,
    IntervalsRule,
    RuleMode,
    SpecificDaysRule,
    SpecificTimesRule,
    TimeBounds,
    TimeConstraints,
)


class IntervalConfig(BaseModel):
    """Inclusive date interval as written in configuration."""

    model_config = ConfigDict(extra="forbid")

    start: date
    end: date

    @field_validator("start", "end", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value: Any) -> Any:
        return _date_only(value)


class DatePickerConfig(BaseModel):
    """Configuration for one date picker widget.

    Mirrors the properties a form designer sets on the widget: the selection
    type and display format, every selectability rule, and the presentation
    flags the interaction logic depends on.
    """

    model_config = ConfigDict(extra="forbid")

    widget_id: str = Field(default="datepicker", min_length=1)
    selection_type: Literal["single", "range"] = "single"
    date_format: DateFormat = DateFormat.DATE
    date_pattern: str = "MM/dd/yyyy"

    min_date: date | None = None
    max_date: date | None = None
    specific_days_mode: RuleMode = RuleMode.NONE
    specific_days: list[date] = Field(default_factory=list)
    interval_days_mode: RuleMode = RuleMode.NONE
    interval_days: list[IntervalConfig] = Field(default_factory=list)
    disable_monday: bool = False
    disable_tuesday: bool = False
    disable_wednesday: bool = False
    disable_thursday: bool = False
    disable_friday: bool = False
    disable_saturday: bool = False
    disable_sunday: bool = False

    min_time: time | None = None
    max_time: time | None = None
    specific_times_mode: RuleMode = RuleMode.NONE
    specific_times: list[time] = Field(default_factory=list)

    show_inline: bool = False
    show_icon: bool = True
    show_icon_inside: bool = False
    show_today_button: bool = False
    clearable: bool = True
    mask_input: bool = False
    readonly: bool = False
    required: bool = False
    alignment: Literal["left", "right", "auto"] = "auto"
    tab_index: int = 0
    focus_delay_ms: int = Field(default=100, ge=0)

    calendar_icon_label: str = "Show calendar"
    clear_button_label: str = "Clear selection"
    today_button_text: str = "Today"
    select_prefix: str = "Select"

    @field_validator("min_date", "max_date", mode="before")
    @classmethod
    def _validate_date_bound(cls, value: Any) -> Any:
        return _date_only(value)

    @field_validator("specific_days", mode="before")
    @classmethod
    def _validate_specific_days(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_date_only(item) for item in value]
        return value

    @field_validator("min_time", "max_time", mode="before")
    @classmethod
    def _validate_time_bound(cls, value: Any) -> Any:
        return _time_only(value)

    @field_validator("specific_times", mode="before")
    @classmethod
    def _validate_specific_times(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_time_only(item) for item in value]
        return value

    @property
    def shows_time_select(self) -> bool:
        return shows_time_select(self.date_format, self.date_pattern)

    @property
    def selection_mode(self) -> SelectionMode:
        if self.selection_type == "range":
            return SelectionMode.RANGE
        if self.shows_time_select and self.date_format is not DateFormat.TIME:
            return SelectionMode.SINGLE_WITH_TIME
        return SelectionMode.SINGLE

    def day_mask(self) -> DayOfWeekMask:
        return DayOfWeekMask(
            monday=self.disable_monday,
            tuesday=self.disable_tuesday,
            wednesday=self.disable_wednesday,
            thursday=self.disable_thursday,
            friday=self.disable_friday,
            saturday=self.disable_saturday,
            sunday=self.disable_sunday,
        )

    def date_constraints(self) -> DateConstraints:
        return DateConstraints(
            day_mask=self.day_mask(),
            specific_days=SpecificDaysRule(
                mode=self.specific_days_mode,
                days=frozenset(self.specific_days),
            ),
            intervals=IntervalsRule(
                mode=self.interval_days_mode,
                intervals=tuple(
                    DateInterval(start=interval.start, end=interval.end)
                    for interval in self.interval_days
                ),
            ),
            bounds=DateBounds(min_date=self.min_date, max_date=self.max_date),
        )

    def time_constraints(self) -> TimeConstraints:
        return TimeConstraints(
            specific_times=SpecificTimesRule(
                mode=self.specific_times_mode,
                times=tuple(self.specific_times),
            ),
            bounds=TimeBounds(min_time=self.min_time, max_time=self.max_time),
        )


def _date_only(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise ValueError("Value must be a valid ISO date (YYYY-MM-DD)") from exc
    return value


def _time_only(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, bool | int | float):
        # YAML reads unquoted values such as 10:30 as base-60 integers.
        raise ValueError("Value must be a quoted time of day (HH:MM)")
    return value


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Configuration validation failed:"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}")
    return "\n".join(lines)


def load_config(path: str | Path) -> DatePickerConfig:
    """Load a YAML widget configuration file from disk."""

    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Unable to read config file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in config file '{config_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration file '{config_path}' must contain a top-level mapping/object."
        )

    return parse_config(data)


def parse_config(data: dict[str, Any]) -> DatePickerConfig:
    """Validate an in-memory mapping, e.g. properties forwarded by the host."""

    try:
        return DatePickerConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(_format_validation_error(exc)) from exc
