"""
Audit trail for sign-ups, logins, admin actions and reminders.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import AuditEvent

logger = logging.getLogger(__name__)

AUDIT_LIMIT = 500
SUSPICIOUS_WINDOW = timedelta(minutes=10)
SUSPICIOUS_FAILURES = 3


def log_event(db: Session, event_type: str, data: Optional[dict] = None, user_agent: Optional[str] = None) -> AuditEvent:
    event = AuditEvent(type=event_type, data=data or {}, user_agent=user_agent)
    db.add(event)
    db.commit()
    logger.debug(f"Audit event {event_type}: {data}")
    return event


def recent_events(db: Session, limit: int = AUDIT_LIMIT) -> List[AuditEvent]:
    return db.query(AuditEvent).order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(limit).all()


def login_failures_since(db: Session, identifier: str, since: datetime) -> int:
    events = db.query(AuditEvent).filter(
        AuditEvent.type == "user_login_failure",
        AuditEvent.created_at > since,
    ).all()
    return sum(1 for event in events if (event.data or {}).get("username") == identifier)


def is_suspicious(db: Session, identifier: str, now: Optional[datetime] = None) -> bool:
    """Three or more failed logins for the same account within ten minutes."""
    now = now or datetime.utcnow()
    return login_failures_since(db, identifier, now - SUSPICIOUS_WINDOW) >= SUSPICIOUS_FAILURES
