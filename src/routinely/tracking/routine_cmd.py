"""CLI handler for `routinely routine` subcommand."""

import argparse
import sys
from datetime import date, datetime

from routinely import config
from routinely.formatting import (
    format_completion,
    format_frequency,
    format_progress,
    format_time_left,
)
from routinely.storage import TZ
from routinely.tracking.completions import AlreadyCompletedError, record_completion
from routinely.tracking.routines import (
    DEFAULT_COLOR,
    WEEKDAYS,
    Frequency,
    Interval,
    Routine,
    Weekly,
    edit_routine,
    get_routine,
    list_routines,
    remove_routine,
    save_routine,
)
from routinely.tracking.schedule import compute_status, status_label


def _parse_weekdays(text: str) -> Weekly:
    days: set[str] = set()
    for token in text.split(","):
        token = token.strip().lower()
        if not token:
            continue
        matches = [d for d in WEEKDAYS if d == token or (len(token) >= 3 and d.startswith(token))]
        if len(matches) != 1:
            raise ValueError(f"unknown weekday {token!r}")
        days.add(matches[0])
    return Weekly(frozenset(days))


def _parse_frequency(args: argparse.Namespace) -> Frequency | None:
    if args.weekly is not None:
        return _parse_weekdays(args.weekly)
    if args.every is not None:
        return Interval(args.every)
    return None


def _parse_today(value: str | None) -> date:
    if value:
        return date.fromisoformat(value)
    return datetime.now(TZ).date()


def _add_frequency_args(p: argparse.ArgumentParser, *, required: bool) -> None:
    group = p.add_mutually_exclusive_group(required=required)
    group.add_argument("--weekly", help='Weekdays, e.g. "mon,wed,fri"')
    group.add_argument("--every", type=int, help="Repeat every N days")


def _add_today_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument("--today", default=None, help="Reference date YYYY-MM-DD (default: local today)")


def run_routine_command(argv: list[str]) -> None:
    parser = argparse.ArgumentParser(prog="routinely routine")
    sub = parser.add_subparsers(dest="action")

    add_p = sub.add_parser("add", help="Add a routine")
    add_p.add_argument("--name", "-n", required=True, help="Routine name")
    _add_frequency_args(add_p, required=True)
    add_p.add_argument("--color", default=None, help="Theme color, e.g. #10B981")

    list_p = sub.add_parser("list", help="Show all routines with their status")
    _add_today_arg(list_p)

    show_p = sub.add_parser("show", help="Show progress and history for a routine")
    show_p.add_argument("id", help="Routine ID")
    _add_today_arg(show_p)

    done_p = sub.add_parser("done", help="Mark a routine completed for today")
    done_p.add_argument("id", help="Routine ID")
    done_p.add_argument("--duration", type=int, default=None, help="Session length in seconds")
    _add_today_arg(done_p)

    edit_p = sub.add_parser("edit", help="Change name, schedule or color")
    edit_p.add_argument("id", help="Routine ID")
    edit_p.add_argument("--name", "-n", default=None, help="New name")
    _add_frequency_args(edit_p, required=False)
    edit_p.add_argument("--color", default=None, help="New theme color")

    delete_p = sub.add_parser("delete", help="Delete a routine by ID")
    delete_p.add_argument("id", help="Routine ID")

    args = parser.parse_args(argv)

    try:
        if args.action == "add":
            _handle_add(args)
        elif args.action == "list":
            _handle_list(_parse_today(args.today))
        elif args.action == "show":
            _handle_show(args.id, _parse_today(args.today))
        elif args.action == "done":
            _handle_done(args.id, args.duration, _parse_today(args.today))
        elif args.action == "edit":
            _handle_edit(args)
        elif args.action == "delete":
            _handle_delete(args.id)
        else:
            parser.print_help()
            sys.exit(1)
    except ValueError as e:
        print(f"error: {e}")
        sys.exit(1)


def _load(routine_id: str) -> Routine:
    routine = get_routine(config.USER_ID, routine_id)
    if routine is None:
        print(f"routine {routine_id} not found")
        sys.exit(1)
    return routine


def _handle_add(args: argparse.Namespace) -> None:
    frequency = _parse_frequency(args)
    assert frequency is not None
    routine = Routine.new(args.name, frequency=frequency, color=args.color or DEFAULT_COLOR)
    save_routine(config.USER_ID, routine)
    print(f"created {routine.id}: {routine.name} ({format_frequency(routine.frequency)})")


def _handle_list(today: date) -> None:
    routines = list_routines(config.USER_ID)
    print(f"{config.USER_NAME}'s routines")
    if not routines:
        print("no routines")
        return
    for r in routines:
        label = status_label(compute_status(r, today), today)
        print(f"  {r.id}  {label:16s}  {format_frequency(r.frequency):20s}  {r.name}")


def _handle_show(routine_id: str, today: date) -> None:
    routine = _load(routine_id)
    status = compute_status(routine, today)
    now = datetime.now(TZ)
    if now.date() != today:
        now = datetime.combine(today, now.time(), tzinfo=TZ)

    print(f"{routine.name}  [{routine.id}]")
    print(f"  schedule: {format_frequency(routine.frequency)}")
    print(f"  progress: {format_progress(status.progress_percent)}")
    print(f"  next:     {format_time_left(status.next_due_date, now, status.is_completed_today)}")
    if not routine.completions:
        print("  no completions yet")
        return
    print("  history:")
    for c in routine.completions:
        print(f"    {format_completion(c)}")


def _handle_done(routine_id: str, duration: int | None, today: date) -> None:
    routine = _load(routine_id)
    try:
        updated = record_completion(routine, today, duration)
    except AlreadyCompletedError:
        print(f"{routine.name} is already completed today")
        return
    save_routine(config.USER_ID, updated)
    print(f"completed {routine.id}: {routine.name}")


def _handle_edit(args: argparse.Namespace) -> None:
    routine = _load(args.id)
    edited = edit_routine(
        routine,
        name=args.name,
        frequency=_parse_frequency(args),
        color=args.color,
    )
    save_routine(config.USER_ID, edited)
    print(f"updated {edited.id}: {edited.name} ({format_frequency(edited.frequency)})")


def _handle_delete(routine_id: str) -> None:
    if remove_routine(config.USER_ID, routine_id):
        print(f"deleted {routine_id}")
    else:
        print(f"routine {routine_id} not found")
        sys.exit(1)
