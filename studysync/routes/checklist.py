from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ChecklistTask, User
from ..schemas import ChecklistTaskCreate, ChecklistTaskUpdate, ChecklistTaskOut, ChecklistOut
from ..auth import get_current_user

router = APIRouter(tags=["checklist"])


def _task_or_404(db: Session, user: User, task_id: int) -> ChecklistTask:
    task = db.query(ChecklistTask).filter(ChecklistTask.id == task_id, ChecklistTask.user_id == user.id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return task


@router.get("/", response_model=ChecklistOut)
async def get_checklist(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All checklist items with done/total counts"""
    tasks = db.query(ChecklistTask).filter(ChecklistTask.user_id == current_user.id).order_by(ChecklistTask.id.asc()).all()
    return {"tasks": tasks, "done": sum(1 for t in tasks if t.done), "total": len(tasks)}

@router.post("/", response_model=ChecklistTaskOut, status_code=201)
async def add_checklist_item(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    task_in: ChecklistTaskCreate = Body(...),
):
    task = ChecklistTask(user_id=current_user.id, text=task_in.text)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task

@router.post("/clear-completed")
async def clear_completed(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    removed = db.query(ChecklistTask).filter(
        ChecklistTask.user_id == current_user.id,
        ChecklistTask.done == True,
    ).delete()
    db.commit()
    return {"removed": removed}

@router.put("/{task_id}", response_model=ChecklistTaskOut)
async def update_checklist_item(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    task_in: ChecklistTaskUpdate = Body(...),
):
    task = _task_or_404(db, current_user, task_id)
    if task_in.text is not None:
        text = task_in.text.strip()
        if not text:
            raise HTTPException(status_code=400, detail="Text must not be blank")
        task.text = text
    if task_in.done is not None:
        task.done = task_in.done
    db.commit()
    db.refresh(task)
    return task

@router.delete("/{task_id}")
async def delete_checklist_item(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = _task_or_404(db, current_user, task_id)
    db.delete(task)
    db.commit()
    return {"success": True, "message": "Checklist item deleted"}
