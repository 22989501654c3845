from datetime import datetime, timedelta

from studysync.celery_tasks import collect_due_reminders
from studysync.models import Assignment, AssignmentStatus, AuditEvent, User
from studysync.services.reminders import pending_reminders, reminder_times, reminders_due_between

NOW = datetime(2030, 1, 7, 12, 0)


def make_assignment(due, **fields):
    fields.setdefault("status", AssignmentStatus.NOT_STARTED)
    fields.setdefault("remind_24h", True)
    fields.setdefault("remind_6h", True)
    fields.setdefault("remind_1h", True)
    return Assignment(title="Essay", course="", due=due, **fields)


def test_reminder_times_follow_flags():
    assignment = make_assignment(NOW + timedelta(days=2), remind_6h=False)
    assert [hours for hours, _ in reminder_times(assignment)] == [24, 1]
    assert reminder_times(assignment)[0][1] == NOW + timedelta(days=1)


def test_submitted_assignments_have_no_reminders():
    assignment = make_assignment(NOW + timedelta(days=2), status=AssignmentStatus.SUBMITTED)
    assert reminder_times(assignment) == []


def test_only_future_reminders_within_a_year_are_pending():
    soon = make_assignment(NOW + timedelta(hours=3))
    assert [hours for hours, _ in pending_reminders(soon, NOW)] == [1]

    far = make_assignment(NOW + timedelta(days=400))
    assert pending_reminders(far, NOW) == []


def test_window_is_open_at_start_and_closed_at_end():
    assignment = make_assignment(NOW + timedelta(hours=6))
    assert [h for h, _ in reminders_due_between(assignment, NOW - timedelta(minutes=5), NOW)] == [6]
    assert reminders_due_between(assignment, NOW, NOW + timedelta(minutes=5)) == []


def test_collect_due_reminders_audits_each_one(db_session):
    user = User(username="student", email="student@studysync.io", hashed_password="x")
    db_session.add(user)
    db_session.commit()

    db_session.add_all([
        make_assignment(NOW + timedelta(hours=24), user_id=user.id),
        make_assignment(NOW + timedelta(hours=1, minutes=-2), user_id=user.id),
        make_assignment(NOW + timedelta(hours=6), user_id=user.id, remind_6h=False),
        make_assignment(NOW + timedelta(hours=24), user_id=user.id, status=AssignmentStatus.SUBMITTED),
    ])
    db_session.commit()

    sent = collect_due_reminders(db_session, NOW)
    assert sorted(entry["offset_hours"] for entry in sent) == [1, 24]

    events = db_session.query(AuditEvent).filter(AuditEvent.type == "reminder_sent").all()
    assert len(events) == 2
    assert all(event.data["user_id"] == user.id for event in events)
