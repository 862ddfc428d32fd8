"""Routine data model and markdown persistence.

A routine is a recurring habit: either a set of weekdays or a fixed number of
days between sessions, plus the dates it was completed on. Each user's
routines live in their own directory, one file per routine.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any
from uuid import uuid4

from routinely.storage import DATA_DIR, read_md, read_md_dir, remove_md, write_md

USERS_DIR = DATA_DIR / "users"
DEFAULT_COLOR = "#3B82F6"

log = logging.getLogger(__name__)

# Index is the Sunday-first weekday number used by the schedule engine.
WEEKDAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)


class ValidationError(ValueError):
    """A routine definition the user must fix before it can be saved."""


@dataclass(frozen=True, slots=True)
class Weekly:
    days: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        days = frozenset(self.days)
        unknown = days - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
        object.__setattr__(self, "days", days)

    def weekday_numbers(self) -> frozenset[int]:
        return frozenset(WEEKDAYS.index(d) for d in self.days)


@dataclass(frozen=True, slots=True)
class Interval:
    days: int

    def __post_init__(self) -> None:
        if isinstance(self.days, bool) or not isinstance(self.days, int) or self.days < 1:
            raise ValueError(f"Interval must be a positive number of days, got {self.days!r}")


Frequency = Weekly | Interval


@dataclass(frozen=True, slots=True)
class Completion:
    date: str  # YYYY-MM-DD
    duration: int | None = None  # seconds

    def __post_init__(self) -> None:
        # string order must match date order, so only the canonical form is accepted
        if date.fromisoformat(self.date).isoformat() != self.date:
            raise ValueError(f"Completion date must be YYYY-MM-DD, got {self.date!r}")
        if self.duration is not None:
            if isinstance(self.duration, bool) or not isinstance(self.duration, int):
                raise ValueError(f"Duration must be whole seconds, got {self.duration!r}")
            if self.duration < 0:
                raise ValueError(f"Duration cannot be negative, got {self.duration}")


def sort_completions(completions) -> tuple[Completion, ...]:
    """Most recent first."""
    return tuple(sorted(completions, key=lambda c: c.date, reverse=True))


@dataclass(frozen=True, slots=True)
class Routine:
    id: str
    name: str
    frequency: Frequency
    completions: tuple[Completion, ...] = field(default_factory=tuple)
    color: str = DEFAULT_COLOR

    @staticmethod
    def new(name: str, *, frequency: Frequency, color: str = DEFAULT_COLOR) -> "Routine":
        routine = Routine(
            id=uuid4().hex[:8],
            name=name.strip(),
            frequency=frequency,
            color=color,
        )
        validate(routine)
        return routine


def validate(routine: Routine) -> None:
    """Form-level checks; the schedule engine itself tolerates all of these."""
    if not routine.name.strip():
        raise ValidationError("Routine name cannot be empty")
    if isinstance(routine.frequency, Weekly) and not routine.frequency.days:
        raise ValidationError("Select at least one weekday")
    if isinstance(routine.frequency, Interval) and routine.frequency.days < 1:
        raise ValidationError("Interval must be at least 1 day")


def edit_routine(
    routine: Routine,
    *,
    name: str | None = None,
    frequency: Frequency | None = None,
    color: str | None = None,
) -> Routine:
    """Apply a full edit. Completions are carried over untouched."""
    changes: dict[str, Any] = {}
    if name is not None:
        changes["name"] = name.strip()
    if frequency is not None:
        changes["frequency"] = frequency
    if color is not None:
        changes["color"] = color
    edited = replace(routine, **changes)
    validate(edited)
    return edited


# --- Record shape on disk ---


def normalize_completion(raw: Any) -> Completion:
    """Accept both the current `{date, duration}` mapping and legacy bare dates."""
    if isinstance(raw, date):
        return Completion(date=raw.isoformat())
    if isinstance(raw, str):
        return Completion(date=raw)
    if isinstance(raw, dict):
        value = raw["date"]
        day = value.isoformat() if isinstance(value, date) else str(value)
        return Completion(date=day, duration=raw.get("duration"))
    raise TypeError(f"Unrecognized completion record: {raw!r}")


def _frequency_to_record(frequency: Frequency) -> tuple[str, Any]:
    if isinstance(frequency, Weekly):
        # Monday-first, the order routines are shown in
        ordered = sorted(frequency.days, key=lambda d: (WEEKDAYS.index(d) - 1) % 7)
        return "weekly", ordered
    return "interval", {"days": frequency.days}


def _frequency_from_record(kind: str, data: Any) -> Frequency:
    if kind == "weekly":
        return Weekly(frozenset(str(d).lower() for d in data or ()))
    if kind == "interval":
        return Interval(int(data["days"]))
    raise ValueError(f"Unknown frequency: {kind!r}")


def to_record(routine: Routine) -> dict[str, Any]:
    kind, data = _frequency_to_record(routine.frequency)
    record: dict[str, Any] = {
        "id": routine.id,
        "frequency": kind,
        "frequency_data": data,
        "completions": [
            {"date": c.date} if c.duration is None else {"date": c.date, "duration": c.duration}
            for c in routine.completions
        ],
    }
    if routine.color != DEFAULT_COLOR:
        record["color"] = routine.color
    return record


def from_record(data: dict[str, Any], name: str) -> Routine:
    return Routine(
        id=str(data["id"]),
        name=name,
        frequency=_frequency_from_record(data["frequency"], data.get("frequency_data")),
        completions=sort_completions(normalize_completion(c) for c in data.get("completions") or ()),
        color=str(data.get("color") or DEFAULT_COLOR),
    )


# --- Per-user store ---


def _routines_dir(user_id: str) -> Path:
    return USERS_DIR / user_id / "routines"


def save_routine(user_id: str, routine: Routine) -> None:
    write_md(_routines_dir(user_id), to_record(routine), routine.name, f"save routine {routine.id}")
    log.info("saved routine %s for %s", routine.id, user_id)


def list_routines(user_id: str) -> list[Routine]:
    return read_md_dir(_routines_dir(user_id), from_record)


def get_routine(user_id: str, routine_id: str) -> Routine | None:
    return read_md(_routines_dir(user_id), routine_id, from_record)


def remove_routine(user_id: str, routine_id: str) -> bool:
    removed = remove_md(_routines_dir(user_id), routine_id, f"remove routine {routine_id}")
    if removed:
        log.info("removed routine %s for %s", routine_id, user_id)
    return removed
