import logging

from fastapi import APIRouter, Depends, HTTPException, Response, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import ShareCodeOut, ShareImportRequest, ShareImportResult
from ..auth import get_current_user
from ..services.assignment_service import list_assignments
from ..services.calendar_service import InvalidShareCode, build_ics, encode_share_code, import_share_code

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calendar"])


@router.get("/export.ics")
async def export_ics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Deadlines as an iCalendar file"""
    body = build_ics(list_assignments(db, current_user.id))
    return Response(
        content=body,
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="studysync-deadlines.ics"'},
    )

@router.get("/share-code", response_model=ShareCodeOut)
async def get_share_code(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assignments = list_assignments(db, current_user.id)
    return {"code": encode_share_code(assignments), "count": len(assignments)}

@router.post("/import", response_model=ShareImportResult)
async def import_shared_deadlines(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    request: ShareImportRequest = Body(...),
):
    """Merge a classmate's share code; assignments already present are kept as they are"""
    try:
        return import_share_code(db, current_user.id, request.code)
    except InvalidShareCode as e:
        logger.warning(f"Rejected share code from user {current_user.id}: {e}")
        raise HTTPException(status_code=400, detail="Invalid share code")
