from datetime import datetime, timedelta


def iso(value):
    return value.replace(microsecond=0).isoformat()


def create(client, headers, **fields):
    payload = {"title": "Lab 1", "course": "PHYS", "due": "2030-03-01T12:00:00", "effort": 2}
    payload.update(fields)
    response = client.post("/assignments/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get(client, auth_headers):
    created = create(client, auth_headers, title="  Lab 1  ")
    assert created["title"] == "Lab 1"
    assert created["status"] == "not_started"
    assert created["progress"] == 5
    assert created["remind_24h"] and created["remind_6h"] and created["remind_1h"]

    fetched = client.get(f"/assignments/{created['id']}", headers=auth_headers).json()
    assert fetched == created


def test_blank_title_is_rejected(client, auth_headers):
    response = client.post("/assignments/", json={"title": "   ", "due": "2030-03-01T12:00:00"}, headers=auth_headers)
    assert response.status_code == 422


def test_malformed_due_and_effort_are_rejected(client, auth_headers):
    assert client.post("/assignments/", json={"title": "x", "due": "soon"}, headers=auth_headers).status_code == 422
    assert client.post("/assignments/", json={"title": "x", "due": "2030-03-01T12:00:00", "effort": "lots"}, headers=auth_headers).status_code == 422
    assert client.post("/assignments/", json={"title": "x", "due": "2030-03-01T12:00:00", "effort": -1}, headers=auth_headers).status_code == 422


def test_offset_due_is_stored_as_utc(client, auth_headers):
    created = create(client, auth_headers, due="2030-03-01T12:00:00+02:00")
    assert created["due"] == "2030-03-01T10:00:00"


def test_list_is_sorted_and_filtered(client, auth_headers):
    create(client, auth_headers, title="Later", course="CHEM", due="2030-05-01T12:00:00")
    create(client, auth_headers, title="Sooner", course="PHYS", due="2030-04-01T12:00:00")

    titles = [a["title"] for a in client.get("/assignments/", headers=auth_headers).json()]
    assert titles == ["Sooner", "Later"]

    by_course = client.get("/assignments/", params={"q": "chem"}, headers=auth_headers).json()
    assert [a["title"] for a in by_course] == ["Later"]

    by_title = client.get("/assignments/", params={"q": "SOON"}, headers=auth_headers).json()
    assert [a["title"] for a in by_title] == ["Sooner"]


def test_due_soon_flag(client, auth_headers):
    soon = create(client, auth_headers, due=iso(datetime.utcnow() + timedelta(hours=2)))
    later = create(client, auth_headers, due=iso(datetime.utcnow() + timedelta(days=5)))
    assert soon["due_soon"] is True
    assert later["due_soon"] is False

    submitted = client.post(f"/assignments/{soon['id']}/submit", headers=auth_headers).json()
    assert submitted["due_soon"] is False


def test_status_transitions(client, auth_headers):
    created = create(client, auth_headers)
    started = client.post(f"/assignments/{created['id']}/start", headers=auth_headers).json()
    assert started["status"] == "in_progress"
    assert started["progress"] == 50

    submitted = client.post(f"/assignments/{created['id']}/submit", headers=auth_headers).json()
    assert submitted["status"] == "submitted"
    assert submitted["progress"] == 100


def test_partial_update(client, auth_headers):
    created = create(client, auth_headers)
    updated = client.put(f"/assignments/{created['id']}", json={"effort": 4.5, "remind_1h": False}, headers=auth_headers).json()
    assert updated["effort"] == 4.5
    assert updated["remind_1h"] is False
    assert updated["title"] == created["title"]


def test_delete(client, auth_headers):
    created = create(client, auth_headers)
    assert client.delete(f"/assignments/{created['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/assignments/{created['id']}", headers=auth_headers).status_code == 404


def test_other_users_assignments_are_hidden(client, auth_headers):
    from conftest import register_and_login

    created = create(client, auth_headers)
    other = register_and_login(client, "other", "other@studysync.io")
    assert client.get(f"/assignments/{created['id']}", headers=other).status_code == 404
    assert client.get("/assignments/", headers=other).json() == []


def test_pending_reminders(client, auth_headers):
    created = create(client, auth_headers, due=iso(datetime.utcnow() + timedelta(days=3)), remind_6h=False)
    reminders = client.get(f"/assignments/{created['id']}/reminders", headers=auth_headers).json()
    assert [r["offset_hours"] for r in reminders] == [24, 1]

    client.post(f"/assignments/{created['id']}/submit", headers=auth_headers)
    assert client.get(f"/assignments/{created['id']}/reminders", headers=auth_headers).json() == []


def test_progress_summary(client, auth_headers):
    first = create(client, auth_headers, title="One")
    second = create(client, auth_headers, title="Two")
    create(client, auth_headers, title="Three")
    client.post(f"/assignments/{first['id']}/submit", headers=auth_headers)
    client.post(f"/assignments/{second['id']}/start", headers=auth_headers)

    progress = client.get("/progress/", headers=auth_headers).json()
    assert progress["total"] == 3
    assert progress["submitted"] == 1
    assert progress["in_progress"] == 1
    assert progress["percentage"] == 33
    assert [a["progress"] for a in progress["assignments"]] == [100, 50, 5]


def test_empty_progress(client, auth_headers):
    progress = client.get("/progress/", headers=auth_headers).json()
    assert progress["total"] == 0
    assert progress["percentage"] == 0
