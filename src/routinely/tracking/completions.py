"""Recording a finished session against a routine."""

import logging
from dataclasses import replace
from datetime import date, datetime

from routinely.tracking.routines import Completion, Routine, sort_completions
from routinely.tracking.schedule import is_completed_on

log = logging.getLogger(__name__)


class AlreadyCompletedError(Exception):
    """The routine already has a completion for that day."""

    def __init__(self, routine_id: str, day: date) -> None:
        super().__init__(f"routine {routine_id} already completed on {day.isoformat()}")
        self.routine_id = routine_id
        self.day = day


def record_completion(routine: Routine, today: date, duration: int | None = None) -> Routine:
    """Return a copy of `routine` with a completion for `today` added.

    At most one completion per calendar day; a second attempt raises
    AlreadyCompletedError and leaves the caller's state alone.
    """
    if isinstance(today, datetime):
        today = today.date()
    if is_completed_on(routine, today):
        raise AlreadyCompletedError(routine.id, today)
    completion = Completion(date=today.isoformat(), duration=duration)
    log.info("recorded completion for %s on %s", routine.id, completion.date)
    return replace(routine, completions=sort_completions((*routine.completions, completion)))
