"""Tracking: routines, their schedules, and recorded completions."""

from routinely.tracking.completions import AlreadyCompletedError, record_completion
from routinely.tracking.routines import (
    Completion,
    Interval,
    Routine,
    ValidationError,
    Weekly,
    edit_routine,
    get_routine,
    list_routines,
    remove_routine,
    save_routine,
)
from routinely.tracking.schedule import RoutineStatus, compute_status, status_label

__all__ = [
    "AlreadyCompletedError",
    "Completion",
    "Interval",
    "Routine",
    "RoutineStatus",
    "ValidationError",
    "Weekly",
    "compute_status",
    "edit_routine",
    "get_routine",
    "list_routines",
    "record_completion",
    "remove_routine",
    "save_routine",
    "status_label",
]
