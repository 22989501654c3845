from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import StudySession, User, Weekday
from ..schemas import StudySessionCreate, StudySessionOut
from ..auth import get_current_user

router = APIRouter(tags=["timetable"])


@router.get("/", response_model=Dict[str, List[StudySessionOut]])
async def get_timetable(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Weekly sessions grouped Monday..Sunday, each day sorted by start time"""
    sessions = db.query(StudySession).filter(StudySession.user_id == current_user.id).order_by(StudySession.start.asc()).all()
    week = {day.value: [] for day in Weekday}
    for session in sessions:
        week[session.day.value].append(session)
    return week

@router.post("/", response_model=StudySessionOut, status_code=201)
async def add_study_session(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    session_in: StudySessionCreate = Body(...),
):
    session = StudySession(
        user_id=current_user.id,
        day=session_in.day,
        start=session_in.start,
        end=session_in.end,
        focus=(session_in.focus or "").strip(),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session

@router.delete("/{session_id}")
async def delete_study_session(
    session_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    session = db.query(StudySession).filter(StudySession.id == session_id, StudySession.user_id == current_user.id).first()
    if not session:
        raise HTTPException(status_code=404, detail="Study session not found")
    db.delete(session)
    db.commit()
    return {"success": True, "message": "Study session deleted"}
