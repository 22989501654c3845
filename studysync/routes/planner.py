from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import WeekPlanOut
from ..auth import get_current_user
from ..services.planner_service import planner_service

router = APIRouter(tags=["planner"])


@router.post("/plan-week", response_model=WeekPlanOut)
async def plan_week(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Place every open assignment into this week's free half-hour slots, earliest due first"""
    return planner_service.plan_week(db, current_user.id)

@router.get("/", response_model=WeekPlanOut)
async def get_week_plan(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return planner_service.stored_week(db, current_user.id)

@router.delete("/")
async def clear_week_plan(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    removed = planner_service.clear(db, current_user.id)
    return {"success": True, "removed": removed}
