"""Due dates, progress and completed-today status for a routine.

Everything here is a pure function of a routine and a reference "today".
Callers decide what "today" is (normally the local date in config.TZ).
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from routinely.tracking.routines import Interval, Routine, Weekly

_FAR_PAST = date(1970, 1, 1)
_SCAN_DAYS = 365


@dataclass(frozen=True, slots=True)
class RoutineStatus:
    next_due_date: date | None
    progress_percent: float
    is_completed_today: bool


def _as_date(day: date) -> date:
    return day.date() if isinstance(day, datetime) else day


def _weekday_number(day: date) -> int:
    """Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


def completed_dates(routine: Routine) -> set[str]:
    return {c.date for c in routine.completions}


def is_completed_on(routine: Routine, day: date) -> bool:
    key = _as_date(day).isoformat()
    return any(c.date == key for c in routine.completions)


def last_completed(routine: Routine) -> date | None:
    if not routine.completions:
        return None
    return date.fromisoformat(max(c.date for c in routine.completions))


def next_due_date(routine: Routine, today: date) -> date | None:
    """None means the routine is never due."""
    today = _as_date(today)
    freq = routine.frequency
    if isinstance(freq, Weekly):
        due_days = freq.weekday_numbers()
        if not due_days:
            return None
        done = completed_dates(routine)
        for offset in range(_SCAN_DAYS):
            day = today + timedelta(days=offset)
            if _weekday_number(day) in due_days and day.isoformat() not in done:
                return day
        return None

    last = last_completed(routine)
    # overdue routines are due now, never in the past
    if last is None or (today - last).days >= freq.days:
        return today
    try:
        return last + timedelta(days=freq.days)
    except OverflowError:
        return date.max


def _week_start(today: date) -> date:
    return today - timedelta(days=_weekday_number(today))


def progress_percent(routine: Routine, today: date) -> float:
    """Share of the current period done, 0-100. Not rounded."""
    today = _as_date(today)
    freq = routine.frequency
    if isinstance(freq, Weekly) and not freq.days:
        return 0.0
    if is_completed_on(routine, today):
        return 100.0

    if isinstance(freq, Weekly):
        due_days = freq.weekday_numbers()
        done = completed_dates(routine)
        start = _week_start(today)
        week = [start + timedelta(days=i) for i in range(7)]
        due = [d for d in week if _weekday_number(d) in due_days]
        if not due:
            return 0.0
        completed = sum(1 for d in due if d.isoformat() in done)
        return 100 * completed / len(due)

    assert isinstance(freq, Interval)
    last = last_completed(routine) or _FAR_PAST
    elapsed = (today - last).days
    return max(0.0, min(100.0, 100 * elapsed / freq.days))


def compute_status(routine: Routine, today: date) -> RoutineStatus:
    today = _as_date(today)
    due = next_due_date(routine, today)
    return RoutineStatus(
        next_due_date=due,
        progress_percent=0.0 if due is None else progress_percent(routine, today),
        is_completed_today=is_completed_on(routine, today),
    )


def status_label(status: RoutineStatus, today: date) -> str:
    """One-line summary for list views."""
    if status.is_completed_today:
        return "completed today"
    if status.next_due_date is None:
        return "unscheduled"
    days = (status.next_due_date - _as_date(today)).days
    if days <= 0:
        return "due today"
    if days == 1:
        return "due tomorrow"
    return f"due in {days} days"
