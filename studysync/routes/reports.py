from fastapi import APIRouter, Depends, Request, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Report, User
from ..schemas import ReportCreate, ReportOut
from ..auth import get_current_user
from ..services.audit import log_event

router = APIRouter(tags=["reports"])


@router.post("/", response_model=ReportOut, status_code=201)
def submit_report(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    report_in: ReportCreate = Body(...),
):
    """Send a problem report to the admins"""
    report = Report(user_id=current_user.id, **report_in.model_dump())
    db.add(report)
    db.commit()
    db.refresh(report)

    log_event(
        db,
        "user_report_submitted",
        {"username": current_user.username, "report_id": report.id, "category": report.category.value},
        request.headers.get("user-agent"),
    )
    return report
