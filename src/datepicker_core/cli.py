"""Command-line interface for checking picker configurations."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from datetime import date, datetime, time
from pathlib import Path
from typing import cast

from datepicker_core.actions import (
    AttributePatch,
    FocusRequest,
    PendingAction,
    RegionFocusCheck,
    ValueCommit,
)
from datepicker_core.completion import DateRange, Selection, SelectionMode
from datepicker_core.config import load_config
from datepicker_core.logging import configure_logging
from datepicker_core.popup import KEY_SPACE, InteractionTarget
from datepicker_core.selectability import SelectabilityResolver
from datepicker_core.widget import DatePickerWidget, WidgetUpdate

_KEY_ALIASES: dict[str, str] = {"space": KEY_SPACE, "escape": "Escape", "tab": "Tab"}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""

    parser = argparse.ArgumentParser(prog="datepicker-core")
    parser.add_argument("--log-level", default="WARNING", help="Root log level.")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Report which dates and times are pickable")
    check_parser.add_argument("--config", type=Path, required=True, help="Widget YAML config.")
    check_parser.add_argument(
        "--time",
        dest="times",
        action="append",
        default=[],
        help="Time of day (HH:MM) to check; may be repeated.",
    )
    check_parser.add_argument("dates", nargs="*", help="ISO dates to check.")
    check_parser.set_defaults(handler=_check_command)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Replay interaction events against a widget"
    )
    simulate_parser.add_argument("--config", type=Path, required=True, help="Widget YAML config.")
    simulate_parser.add_argument(
        "--today",
        default=None,
        help="ISO date used by the 'today' event instead of the system clock.",
    )
    simulate_parser.add_argument(
        "events",
        nargs="+",
        help=(
            "Events: pick:ISO, pick:ISO/ISO, today, clear, trigger, key:NAME, click, "
            "outside:TARGET, blur."
        ),
    )
    simulate_parser.set_defaults(handler=_simulate_command)
    return parser


def _parse_value(text: str) -> date:
    value = datetime.fromisoformat(text)
    if "T" in text or " " in text.strip():
        return value
    return value.date()


def _check_command(args: argparse.Namespace) -> int:
    resolver = SelectabilityResolver.from_config(load_config(args.config))

    for raw in args.dates:
        reason = resolver.date_rejection(_parse_value(raw))
        print(_verdict(raw, reason))
    for raw in args.times:
        reason = resolver.time_rejection(time.fromisoformat(raw))
        print(_verdict(raw, reason))
    return 0


def _verdict(label: str, reason: str | None) -> str:
    if reason is None:
        return f"{label}: selectable"
    return f"{label}: not selectable ({reason})"


def _simulate_command(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.today is not None:
        fixed = datetime.fromisoformat(args.today)
        widget = DatePickerWidget(config, clock=lambda: fixed)
    else:
        widget = DatePickerWidget(config)

    for event in args.events:
        update = _dispatch(widget, event)
        print(f"{event} -> {_describe(update)}")
    return 0


def _dispatch(widget: DatePickerWidget, event: str) -> WidgetUpdate:
    name, _, argument = event.partition(":")
    if name == "pick":
        if "/" in argument:
            if widget.mode is not SelectionMode.RANGE:
                raise ValueError(
                    f"Range pick '{argument}' needs a range widget, not {widget.mode.value}"
                )
            start, _, end = argument.partition("/")
            return widget.pick(DateRange.ordered(_parse_value(start), _parse_value(end)))
        return widget.pick(_parse_value(argument))
    if name == "today":
        return widget.today()
    if name == "clear":
        return widget.clear()
    if name == "trigger":
        return widget.trigger()
    if name == "key":
        return widget.key(_KEY_ALIASES.get(argument.lower(), argument))
    if name == "click":
        return widget.input_click()
    if name == "outside":
        return widget.outside_interaction(InteractionTarget(argument or "elsewhere"))
    if name == "blur":
        return widget.focus_left_region()
    raise ValueError(f"Unknown event: {event}")


def _format_selection(selection: Selection) -> str:
    if selection is None:
        return "-"
    if isinstance(selection, DateRange):
        start = selection.start.isoformat() if selection.start is not None else "-"
        end = selection.end.isoformat() if selection.end is not None else "-"
        return f"{start}/{end}"
    return selection.isoformat()


def _format_action(action: PendingAction) -> str:
    if isinstance(action, FocusRequest):
        return f"focus:{action.target.value}"
    if isinstance(action, AttributePatch):
        return f"patch:{action.element.value}"
    if isinstance(action, RegionFocusCheck):
        return "check-focus"
    if isinstance(action, ValueCommit):
        return "commit"
    raise TypeError(f"Unsupported action: {action!r}")


def _describe(update: WidgetUpdate) -> str:
    parts = [f"state={update.state.value}", f"selection={_format_selection(update.selection)}"]
    if update.rejected_by is not None:
        parts.append(f"rejected={update.rejected_by}")
    if update.actions:
        parts.append("actions=" + ",".join(_format_action(action) for action in update.actions))
    return " ".join(parts)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    try:
        configure_logging(log_level=args.log_level)
        command_handler = cast(Callable[[argparse.Namespace], int], handler)
        return command_handler(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
