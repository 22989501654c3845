"""
Celery tasks for StudySync deadline reminders
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from .celery_app import celery_app
from .database import SessionLocal
from .models import Assignment, AssignmentStatus
from .services.audit import log_event
from .services.reminders import reminders_due_between

logger = logging.getLogger(__name__)

DISPATCH_INTERVAL = timedelta(minutes=5)


def collect_due_reminders(db: Session, now: datetime, interval: timedelta = DISPATCH_INTERVAL) -> list:
    """Record every reminder that fell due in (now - interval, now]."""
    window_start = now - interval
    assignments = db.query(Assignment).filter(
        Assignment.status != AssignmentStatus.SUBMITTED,
        Assignment.due > window_start,
    ).all()

    sent = []
    for assignment in assignments:
        for hours, remind_at in reminders_due_between(assignment, window_start, now):
            logger.info(f"Reminder: '{assignment.display_title}' for user {assignment.user_id} is due in {hours}h")
            sent.append({
                "assignment_id": assignment.id,
                "user_id": assignment.user_id,
                "offset_hours": hours,
                "remind_at": remind_at.isoformat(),
            })

    for entry in sent:
        log_event(db, "reminder_sent", entry)
    return sent


@celery_app.task(bind=True)
def dispatch_due_reminders(self):
    """
    Runs every five minutes from beat. Delivery channels live outside this
    service; each reminder is logged and written to the audit trail.
    """
    db = SessionLocal()
    try:
        sent = collect_due_reminders(db, datetime.utcnow())
        logger.info(f"Dispatched {len(sent)} reminders")
        return {"status": "success", "sent": len(sent)}
    except Exception as e:
        logger.error(f"Error dispatching reminders: {e}")
        db.rollback()
        return {"status": "error", "message": str(e)}
    finally:
        db.close()
