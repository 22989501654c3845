"""
Assignment queries and derived fields shared by several routes.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import Assignment, AssignmentStatus
from ..scheduling.algorithms.step_weighting import round_half_up

DUE_SOON = timedelta(hours=24)

PROGRESS_BY_STATUS = {
    AssignmentStatus.SUBMITTED: 100,
    AssignmentStatus.IN_PROGRESS: 50,
    AssignmentStatus.NOT_STARTED: 5,
}


def is_due_soon(assignment: Assignment, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    return assignment.status != AssignmentStatus.SUBMITTED and assignment.due - now < DUE_SOON


def progress_for(assignment: Assignment) -> int:
    return PROGRESS_BY_STATUS.get(assignment.status, 5)


def to_out(assignment: Assignment, now: Optional[datetime] = None) -> dict:
    return {
        "id": assignment.id,
        "title": assignment.title,
        "course": assignment.course or "",
        "due": assignment.due,
        "effort": assignment.effort,
        "status": assignment.status,
        "remind_24h": assignment.remind_24h,
        "remind_6h": assignment.remind_6h,
        "remind_1h": assignment.remind_1h,
        "due_soon": is_due_soon(assignment, now),
        "progress": progress_for(assignment),
    }


def list_assignments(db: Session, user_id: int, query: str = "") -> List[Assignment]:
    """User's assignments sorted by due date, optionally filtered by title/course substring."""
    assignments = db.query(Assignment).filter(Assignment.user_id == user_id).order_by(Assignment.due.asc(), Assignment.id.asc()).all()
    needle = (query or "").strip().lower()
    if not needle:
        return assignments
    return [a for a in assignments if needle in a.title.lower() or needle in (a.course or "").lower()]


def get_assignment(db: Session, user_id: int, assignment_id: int) -> Optional[Assignment]:
    return db.query(Assignment).filter(Assignment.id == assignment_id, Assignment.user_id == user_id).first()


def open_assignments(db: Session, user_id: int) -> List[Assignment]:
    """Everything the planner should still schedule."""
    return db.query(Assignment).filter(
        Assignment.user_id == user_id,
        Assignment.status != AssignmentStatus.SUBMITTED,
    ).order_by(Assignment.id.asc()).all()


def progress_summary(assignments: List[Assignment], now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    total = len(assignments)
    submitted = sum(1 for a in assignments if a.status == AssignmentStatus.SUBMITTED)
    in_progress = sum(1 for a in assignments if a.status == AssignmentStatus.IN_PROGRESS)
    due_soon = sum(1 for a in assignments if is_due_soon(a, now))
    return {
        "total": total,
        "submitted": submitted,
        "in_progress": in_progress,
        "due_soon": due_soon,
        "percentage": int(round_half_up(submitted / total * 100)) if total else 0,
    }
