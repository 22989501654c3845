from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import ProgressOut
from ..auth import get_current_user
from ..services.assignment_service import list_assignments, progress_summary, to_out

router = APIRouter(tags=["progress"])


@router.get("/", response_model=ProgressOut)
async def get_progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = datetime.utcnow()
    assignments = list_assignments(db, current_user.id)
    summary = progress_summary(assignments, now)
    summary["assignments"] = [to_out(a, now) for a in assignments]
    return summary
