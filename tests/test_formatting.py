"""Tests for formatting.py — display helpers."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from routinely.formatting import (
    format_completion,
    format_duration,
    format_frequency,
    format_progress,
    format_time_left,
)
from routinely.tracking.routines import Completion, Interval, Weekly

SEOUL = ZoneInfo("Asia/Seoul")


def test_format_frequency_weekly_monday_first():
    freq = Weekly(frozenset({"sunday", "wednesday", "monday"}))

    assert format_frequency(freq) == "Mon, Wed, Sun"


def test_format_frequency_weekly_empty():
    assert format_frequency(Weekly()) == "no days selected"


def test_format_frequency_interval():
    assert format_frequency(Interval(3)) == "every 3 days"
    assert format_frequency(Interval(1)) == "every day"


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (125, "02:05"), (3599, "59:59"), (3600, "01:00:00"), (45296, "12:34:56")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_completion_with_duration():
    assert format_completion(Completion("2026-10-12", 125)) == "Mon, October 12, 2026 (02:05)"


def test_format_completion_without_duration():
    assert format_completion(Completion("2026-10-03")) == "Sat, October 3, 2026"


def test_format_progress_rounds_half_up():
    assert format_progress(100 / 3) == "33%"
    assert format_progress(62.5) == "63%"
    assert format_progress(0) == "0%"


def test_time_left_none():
    now = datetime(2026, 10, 17, 9, 0, tzinfo=SEOUL)

    assert format_time_left(None, now, False) == "no upcoming schedule"


def test_time_left_due_today():
    now = datetime(2026, 10, 17, 9, 0, tzinfo=SEOUL)

    assert format_time_left(date(2026, 10, 17), now, False) == "due today!"
    assert format_time_left(date(2026, 10, 17), now, True) == "completed today!"


def test_time_left_hours_only():
    now = datetime(2026, 10, 17, 9, 0, tzinfo=SEOUL)

    assert format_time_left(date(2026, 10, 18), now, False) == "15 hours left"


def test_time_left_days_and_hours():
    now = datetime(2026, 10, 17, 9, 0, tzinfo=SEOUL)

    assert format_time_left(date(2026, 10, 20), now, True) == "2 days 15 hours left"


def test_time_left_whole_days():
    now = datetime(2026, 10, 17, 0, 0, tzinfo=SEOUL)

    assert format_time_left(date(2026, 10, 18), now, False) == "1 day left"


def test_time_left_counts_dst_change():
    la = ZoneInfo("America/Los_Angeles")
    # clocks fall back on 2026-11-01, adding an hour before the due day starts
    now = datetime(2026, 10, 31, 12, 0, tzinfo=la)

    assert format_time_left(date(2026, 11, 2), now, False) == "1 day 13 hours left"
