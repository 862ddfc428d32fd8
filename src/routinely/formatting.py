"""Display text for routines: schedules, durations, history lines, time left."""

import math
from datetime import date, datetime, time, timezone

from routinely.tracking.routines import WEEKDAYS, Completion, Frequency, Weekly

# Monday-first display order
_DISPLAY_ORDER = WEEKDAYS[1:] + WEEKDAYS[:1]


def format_frequency(frequency: Frequency) -> str:
    if isinstance(frequency, Weekly):
        days = [d[:3].capitalize() for d in _DISPLAY_ORDER if d in frequency.days]
        return ", ".join(days) if days else "no days selected"
    if frequency.days == 1:
        return "every day"
    return f"every {frequency.days} days"


def format_duration(seconds: int) -> str:
    """MM:SS, or HH:MM:SS once a session passes an hour."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_completion(completion: Completion) -> str:
    """e.g. ``Mon, October 12, 2026 (02:05)``."""
    d = date.fromisoformat(completion.date)
    text = f"{d:%a}, {d:%B} {d.day}, {d.year}"
    if completion.duration is not None:
        text += f" ({format_duration(completion.duration)})"
    return text


def format_progress(percent: float) -> str:
    return f"{math.floor(percent + 0.5)}%"


def format_time_left(due: date | None, now: datetime, completed_today: bool) -> str:
    """Countdown to the start of the due day, measured from `now`."""
    if due is None:
        return "no upcoming schedule"
    due_start = datetime.combine(due, time(), tzinfo=now.tzinfo)
    # compare in UTC so a DST change before the due day is counted
    remaining = (due_start.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()
    if remaining <= 0:
        return "completed today!" if completed_today else "due today!"

    days = int(remaining // 86400)
    hours = int(remaining // 3600) % 24
    parts: list[str] = []
    if days > 0:
        parts.append(f"{days} day" if days == 1 else f"{days} days")
    if hours > 0 or days == 0:
        parts.append(f"{hours} hour" if hours == 1 else f"{hours} hours")
    return " ".join(parts) + " left"
