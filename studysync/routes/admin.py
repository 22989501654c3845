from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Assignment, AssignmentStatus, Report, ReportStatus, User, UserRole
from ..schemas import AdminSummary, AuditEventOut, ReportOut, UserInfo
from ..auth import require_admin
from ..services.assignment_service import is_due_soon, progress_summary
from ..services.audit import AUDIT_LIMIT, is_suspicious, log_event, recent_events

router = APIRouter(tags=["admin"])


def _user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _report_or_404(db: Session, report_id: int) -> Report:
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


def _set_active(db: Session, admin: User, user: User, is_active: bool, user_agent: str = None):
    # Prevent admin from blocking themselves
    if user.id == admin.id and not is_active:
        raise HTTPException(status_code=400, detail="Cannot block your own account")

    user.is_active = is_active
    db.commit()
    log_event(
        db,
        "admin_user_unblocked" if is_active else "admin_user_blocked",
        {"admin": admin.username, "username": user.username},
        user_agent,
    )

# ============================================================================
# OVERVIEW
# ============================================================================

@router.get("/summary", response_model=AdminSummary)
def admin_summary(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Totals across every user (admin only)"""
    now = datetime.utcnow()
    assignments = db.query(Assignment).all()
    return {
        "users": db.query(User).count(),
        "assignments": len(assignments),
        "submitted": sum(1 for a in assignments if a.status == AssignmentStatus.SUBMITTED),
        "in_progress": sum(1 for a in assignments if a.status == AssignmentStatus.IN_PROGRESS),
        "due_soon": sum(1 for a in assignments if is_due_soon(a, now)),
    }

@router.get("/audit", response_model=List[AuditEventOut])
def audit_log(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Latest audit events, newest first (admin only)"""
    return recent_events(db, AUDIT_LIMIT)

# ============================================================================
# USERS
# ============================================================================

@router.get("/users", response_model=List[UserInfo])
def get_all_users(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Get all users with their activity counts (admin only)"""
    now = datetime.utcnow()
    users = db.query(User).order_by(User.id.asc()).all()
    return [
        {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "name": user.name,
            "is_active": user.is_active,
            "role": user.role,
            "assignments": len(user.assignments),
            "checklist_tasks": len(user.checklist_tasks),
            "study_sessions": len(user.study_sessions),
            "completion_percentage": progress_summary(user.assignments, now)["percentage"],
            "suspicious": is_suspicious(db, user.username, now),
        }
        for user in users
    ]

@router.put("/users/{user_id}/role")
def update_user_role(
    user_id: int,
    role: str,
    request: Request,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update user role (admin only)"""
    if role not in [r.value for r in UserRole]:
        raise HTTPException(status_code=400, detail="Invalid role")

    user = _user_or_404(db, user_id)

    # Prevent admin from removing their own admin role
    if user.id == current_user.id and role == UserRole.USER.value:
        raise HTTPException(status_code=400, detail="Cannot remove your own admin role")

    user.role = UserRole(role)
    db.commit()
    log_event(db, "admin_role_changed", {"admin": current_user.username, "username": user.username, "role": role}, request.headers.get("user-agent"))

    return {"message": f"User {user.username} role updated to {role}"}

@router.put("/users/{user_id}/status")
def update_user_status(
    user_id: int,
    is_active: bool,
    request: Request,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Block or unblock a user (admin only)"""
    user = _user_or_404(db, user_id)
    _set_active(db, current_user, user, is_active, request.headers.get("user-agent"))

    status_text = "unblocked" if is_active else "blocked"
    return {"message": f"User {user.username} {status_text}"}

@router.delete("/users/{user_id}")
def delete_user(user_id: int, request: Request, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Delete a user and all of their data (admin only)"""
    user = _user_or_404(db, user_id)
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    username = user.username
    db.delete(user)
    db.commit()
    log_event(db, "admin_user_deleted", {"admin": current_user.username, "username": username}, request.headers.get("user-agent"))
    return {"message": "User deleted"}

# ============================================================================
# REPORTS
# ============================================================================

@router.get("/reports", response_model=List[ReportOut])
def get_reports(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(Report).order_by(Report.created_at.desc(), Report.id.desc()).all()

@router.put("/reports/{report_id}/toggle", response_model=ReportOut)
def toggle_report(report_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Flip a report between open and resolved"""
    report = _report_or_404(db, report_id)
    report.status = ReportStatus.RESOLVED if report.status == ReportStatus.OPEN else ReportStatus.OPEN
    db.commit()
    db.refresh(report)
    return report

@router.post("/reports/{report_id}/block-user")
def block_report_author(report_id: int, request: Request, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Block whoever filed the report"""
    report = _report_or_404(db, report_id)
    if report.user_id is None:
        raise HTTPException(status_code=404, detail="Report has no author")

    user = _user_or_404(db, report.user_id)
    _set_active(db, current_user, user, False, request.headers.get("user-agent"))
    return {"message": f"User {user.username} blocked"}

@router.delete("/reports/{report_id}")
def delete_report(report_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    report = _report_or_404(db, report_id)
    db.delete(report)
    db.commit()
    return {"message": "Report deleted"}
