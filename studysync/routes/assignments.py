"""Assignments API: CRUD, status changes and pending reminders."""

from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Assignment, AssignmentStatus, User
from ..schemas import AssignmentCreate, AssignmentUpdate, AssignmentOut, ReminderOut
from ..auth import get_current_user
from ..services.assignment_service import get_assignment, list_assignments, to_out
from ..services.reminders import pending_reminders

router = APIRouter(tags=["assignments"])


def _owned_or_404(db: Session, user: User, assignment_id: int) -> Assignment:
    assignment = get_assignment(db, user.id, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return assignment


@router.get("/", response_model=List[AssignmentOut])
async def list_user_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    q: str = Query("", description="Filter by title or course"),
):
    now = datetime.utcnow()
    return [to_out(a, now) for a in list_assignments(db, current_user.id, q)]

@router.post("/", response_model=AssignmentOut, status_code=201)
async def create_assignment(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    assignment_in: AssignmentCreate = Body(...),
):
    assignment = Assignment(user_id=current_user.id, **assignment_in.model_dump())
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return to_out(assignment)

@router.get("/{assignment_id}", response_model=AssignmentOut)
async def get_user_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_out(_owned_or_404(db, current_user, assignment_id))

@router.put("/{assignment_id}", response_model=AssignmentOut)
async def update_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    assignment_in: AssignmentUpdate = Body(...),
):
    assignment = _owned_or_404(db, current_user, assignment_id)

    # Update only the fields that were provided
    for field, value in assignment_in.model_dump(exclude_unset=True).items():
        if value is None and field in ("title", "due", "status"):
            continue
        setattr(assignment, field, value)

    db.commit()
    db.refresh(assignment)
    return to_out(assignment)

@router.post("/{assignment_id}/start", response_model=AssignmentOut)
async def start_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assignment = _owned_or_404(db, current_user, assignment_id)
    assignment.status = AssignmentStatus.IN_PROGRESS
    db.commit()
    db.refresh(assignment)
    return to_out(assignment)

@router.post("/{assignment_id}/submit", response_model=AssignmentOut)
async def submit_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assignment = _owned_or_404(db, current_user, assignment_id)
    assignment.status = AssignmentStatus.SUBMITTED
    db.commit()
    db.refresh(assignment)
    return to_out(assignment)

@router.get("/{assignment_id}/reminders", response_model=List[ReminderOut])
async def get_assignment_reminders(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assignment = _owned_or_404(db, current_user, assignment_id)
    return [
        {"assignment_id": assignment.id, "offset_hours": hours, "remind_at": at}
        for hours, at in pending_reminders(assignment, datetime.utcnow())
    ]

@router.delete("/{assignment_id}")
async def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assignment = _owned_or_404(db, current_user, assignment_id)
    db.delete(assignment)
    db.commit()
    return {"success": True, "message": "Assignment deleted"}
