"""
Deadline export (iCalendar) and share codes for swapping deadlines with classmates.
"""

import base64
import binascii
import json
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from ..models import Assignment
from ..schemas import SharedAssignment

logger = logging.getLogger(__name__)

PRODID = "-//StudySync//Deadlines//EN"

_shared_list = TypeAdapter(List[SharedAssignment])


class InvalidShareCode(ValueError):
    pass


def to_ics_date(value: datetime) -> str:
    """Naive datetimes are stored as UTC."""
    return value.strftime("%Y%m%dT%H%M%SZ")


def escape_ics(text: str) -> str:
    return (text or "").replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n").replace(",", "\\,").replace(";", "\\;")


def build_ics(assignments: Iterable[Assignment], now: Optional[datetime] = None) -> str:
    stamp = to_ics_date(now or datetime.utcnow())
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
    ]
    for assignment in assignments:
        start = to_ics_date(assignment.due)
        uid = f"{assignment.id}@studysync" if assignment.id is not None else f"{assignment.title}-{start}@studysync"
        lines.extend([
            "BEGIN:VEVENT",
            f"UID:{uid}",
            f"DTSTAMP:{stamp}",
            f"DTSTART:{start}",
            f"SUMMARY:{escape_ics(assignment.display_title)}",
            f"DESCRIPTION:{escape_ics('Assignment deadline')}",
            "END:VEVENT",
        ])
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines)


def encode_share_code(assignments: Iterable[Assignment]) -> str:
    payload = [
        {
            "title": a.title,
            "course": a.course or "",
            "due": a.due.isoformat(),
            "effort": a.effort,
            "status": a.status.value,
        }
        for a in assignments
    ]
    raw = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_share_code(code: str) -> List[SharedAssignment]:
    try:
        raw = base64.b64decode(code.strip(), validate=True)
        return _shared_list.validate_python(json.loads(raw.decode("utf-8")))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise InvalidShareCode(str(e)) from e


def merge_key(course: Optional[str], title: str, due: datetime) -> tuple:
    return ((course or "").lower(), title.lower(), due.isoformat())


def import_share_code(db: Session, user_id: int, code: str) -> dict:
    """Add shared assignments the user does not already have; existing ones win."""
    shared = decode_share_code(code)
    existing = db.query(Assignment).filter(Assignment.user_id == user_id).all()
    seen = {merge_key(a.course, a.title, a.due) for a in existing}

    imported = 0
    for entry in shared:
        key = merge_key(entry.course, entry.title, entry.due)
        if key in seen:
            continue
        seen.add(key)
        db.add(Assignment(
            user_id=user_id,
            title=entry.title,
            course=entry.course,
            due=entry.due,
            effort=entry.effort,
            status=entry.status,
        ))
        imported += 1
    db.commit()

    logger.info(f"Imported {imported} of {len(shared)} shared assignments for user {user_id}")
    return {"imported": imported, "total": len(existing) + imported}
