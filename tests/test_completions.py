"""Tests for completions.py — recording a finished session."""

from datetime import date, datetime, timedelta

import pytest

from routinely.tracking.completions import AlreadyCompletedError, record_completion
from routinely.tracking.routines import Completion, Interval, Routine, Weekly
from routinely.tracking.schedule import compute_status, is_completed_on

MONDAY = date(2026, 10, 12)


def _routine(*completions):
    return Routine(
        id="r1",
        name="Stretch",
        frequency=Weekly(frozenset({"monday", "wednesday"})),
        completions=tuple(completions),
    )


def test_record_completion_marks_today():
    routine = _routine()

    updated = record_completion(routine, MONDAY)

    assert is_completed_on(updated, MONDAY)
    assert updated.completions == (Completion("2026-10-12"),)


def test_record_completion_does_not_mutate_input():
    routine = _routine()

    record_completion(routine, MONDAY)

    assert routine.completions == ()


def test_record_completion_twice_same_day_fails():
    updated = record_completion(_routine(), MONDAY)

    with pytest.raises(AlreadyCompletedError) as exc_info:
        record_completion(updated, MONDAY)

    assert exc_info.value.routine_id == "r1"
    assert exc_info.value.day == MONDAY


def test_record_completion_accepts_datetime():
    updated = record_completion(_routine(), datetime(2026, 10, 12, 21, 30))

    assert updated.completions[0].date == "2026-10-12"


def test_record_completion_keeps_descending_order():
    routine = _routine()
    for offset in (3, 0, 9, 1, 5):
        routine = record_completion(routine, MONDAY + timedelta(days=offset))

    dates = [c.date for c in routine.completions]
    assert dates == sorted(dates, reverse=True)
    assert len(dates) == 5


def test_record_completion_backfills_older_day():
    routine = _routine(Completion("2026-10-14"))

    updated = record_completion(routine, MONDAY)

    assert [c.date for c in updated.completions] == ["2026-10-14", "2026-10-12"]


def test_record_completion_with_duration():
    routine = Routine(id="r2", name="Run", frequency=Interval(3))

    updated = record_completion(routine, MONDAY, duration=125)

    assert updated.completions[0].duration == 125
    assert compute_status(updated, MONDAY) == compute_status(
        record_completion(routine, MONDAY), MONDAY
    )


def test_record_completion_accepts_long_sessions():
    updated = record_completion(_routine(), MONDAY, duration=10 * 24 * 3600)

    assert updated.completions[0].duration == 864000


def test_record_completion_rejects_negative_duration():
    with pytest.raises(ValueError):
        record_completion(_routine(), MONDAY, duration=-1)
