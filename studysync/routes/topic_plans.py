from typing import List
from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ChecklistTask, TopicPlan, User
from ..schemas import TopicPlanCreate, TopicPlanOut, ChecklistTaskOut, PlannerBlockOut
from ..auth import get_current_user
from ..services.assignment_service import get_assignment
from ..services.planner_service import planner_service
from ..services.topic_planner import create_topic_plan

router = APIRouter(tags=["topic-plans"])


def _plan_or_404(db: Session, user: User, plan_id: int) -> TopicPlan:
    plan = db.query(TopicPlan).filter(TopicPlan.id == plan_id, TopicPlan.user_id == user.id).first()
    if not plan:
        raise HTTPException(status_code=404, detail="Topic plan not found")
    return plan


@router.post("/", response_model=TopicPlanOut, status_code=201)
async def generate_topic_plan(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    plan_in: TopicPlanCreate = Body(...),
):
    """Generate outline, key questions, weighted steps and research queries for a topic"""
    assignment = None
    if plan_in.assignment_id is not None:
        assignment = get_assignment(db, current_user.id, plan_in.assignment_id)
        if not assignment:
            raise HTTPException(status_code=404, detail="Assignment not found")
    return create_topic_plan(db, current_user.id, plan_in.topic, assignment)

@router.get("/", response_model=List[TopicPlanOut])
async def list_topic_plans(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(TopicPlan).filter(TopicPlan.user_id == current_user.id).order_by(TopicPlan.created_at.desc(), TopicPlan.id.desc()).all()

@router.get("/{plan_id}", response_model=TopicPlanOut)
async def get_topic_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _plan_or_404(db, current_user, plan_id)

@router.post("/{plan_id}/checklist", response_model=List[ChecklistTaskOut])
async def add_steps_to_checklist(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Append one checklist item per plan step"""
    plan = _plan_or_404(db, current_user, plan_id)
    tasks = [
        ChecklistTask(user_id=current_user.id, text=f"{step['text']} ({step['duration']}h)", topic_plan_id=plan.id)
        for step in plan.steps or []
    ]
    db.add_all(tasks)
    db.commit()
    for task in tasks:
        db.refresh(task)
    return tasks

@router.post("/{plan_id}/planner", response_model=List[PlannerBlockOut])
async def add_steps_to_planner(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Spread the plan's steps round-robin across the week and append them to the stored plan"""
    plan = _plan_or_404(db, current_user, plan_id)
    return planner_service.append_topic_plan(db, current_user.id, plan)
