"""
Deadline reminders: 24h, 6h and 1h before an assignment is due.
"""

from datetime import datetime, timedelta
from typing import List, Tuple

from ..models import Assignment, AssignmentStatus

REMINDER_OFFSETS = [(24, "remind_24h"), (6, "remind_6h"), (1, "remind_1h")]
MAX_LOOKAHEAD = timedelta(days=365)


def reminder_times(assignment: Assignment) -> List[Tuple[int, datetime]]:
    """All enabled (offset_hours, remind_at) pairs, ignoring the clock."""
    if assignment.status == AssignmentStatus.SUBMITTED:
        return []
    times = []
    for hours, flag in REMINDER_OFFSETS:
        if getattr(assignment, flag, True):
            times.append((hours, assignment.due - timedelta(hours=hours)))
    return times


def pending_reminders(assignment: Assignment, now: datetime) -> List[Tuple[int, datetime]]:
    """Reminders still ahead of `now` and less than a year away."""
    return [(hours, at) for hours, at in reminder_times(assignment) if timedelta(0) < at - now < MAX_LOOKAHEAD]


def reminders_due_between(assignment: Assignment, window_start: datetime, window_end: datetime) -> List[Tuple[int, datetime]]:
    """Reminders whose time falls in (window_start, window_end]."""
    return [(hours, at) for hours, at in reminder_times(assignment) if window_start < at <= window_end]
