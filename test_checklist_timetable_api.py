def test_checklist_crud_and_stats(client, auth_headers):
    first = client.post("/checklist/", json={"text": "Read chapter 3"}, headers=auth_headers).json()
    client.post("/checklist/", json={"text": "Problem set"}, headers=auth_headers)

    updated = client.put(f"/checklist/{first['id']}", json={"done": True}, headers=auth_headers).json()
    assert updated["done"] is True
    assert updated["text"] == "Read chapter 3"

    checklist = client.get("/checklist/", headers=auth_headers).json()
    assert checklist["done"] == 1
    assert checklist["total"] == 2

    cleared = client.post("/checklist/clear-completed", headers=auth_headers).json()
    assert cleared["removed"] == 1
    remaining = client.get("/checklist/", headers=auth_headers).json()
    assert [t["text"] for t in remaining["tasks"]] == ["Problem set"]


def test_checklist_rejects_blank_text(client, auth_headers):
    assert client.post("/checklist/", json={"text": "  "}, headers=auth_headers).status_code == 422
    task = client.post("/checklist/", json={"text": "ok"}, headers=auth_headers).json()
    assert client.put(f"/checklist/{task['id']}", json={"text": " "}, headers=auth_headers).status_code == 400


def test_checklist_delete_and_missing(client, auth_headers):
    task = client.post("/checklist/", json={"text": "temp"}, headers=auth_headers).json()
    assert client.delete(f"/checklist/{task['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"/checklist/{task['id']}", headers=auth_headers).status_code == 404


def test_topic_plan_steps_become_checklist_items(client, auth_headers):
    plan = client.post("/topic-plans/", json={"topic": "Titration lab"}, headers=auth_headers).json()
    tasks = client.post(f"/topic-plans/{plan['id']}/checklist", headers=auth_headers).json()
    assert len(tasks) == 8
    assert tasks[0]["text"] == "Clarify assignment requirements (0.5h)"
    assert tasks[4]["text"].startswith("Run experiments and collect data")
    assert all(t["topic_plan_id"] == plan["id"] for t in tasks)


def test_timetable_groups_by_day_sorted_by_start(client, auth_headers):
    client.post("/timetable/", json={"day": "Tuesday", "start": "14:00", "end": "15:00", "focus": "Calculus"}, headers=auth_headers)
    client.post("/timetable/", json={"day": "Tuesday", "start": "09:00", "end": "10:30", "focus": "Physics"}, headers=auth_headers)
    client.post("/timetable/", json={"day": "Sunday", "start": "18:00", "end": "19:00"}, headers=auth_headers)

    week = client.get("/timetable/", headers=auth_headers).json()
    assert list(week.keys()) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    assert [s["focus"] for s in week["Tuesday"]] == ["Physics", "Calculus"]
    assert len(week["Sunday"]) == 1
    assert week["Monday"] == []


def test_timetable_end_must_follow_start(client, auth_headers):
    response = client.post("/timetable/", json={"day": "Monday", "start": "10:00", "end": "09:00"}, headers=auth_headers)
    assert response.status_code == 422


def test_timetable_delete(client, auth_headers):
    session = client.post("/timetable/", json={"day": "Friday", "start": "10:00", "end": "11:00"}, headers=auth_headers).json()
    assert client.delete(f"/timetable/{session['id']}", headers=auth_headers).status_code == 200
    assert client.get("/timetable/", headers=auth_headers).json()["Friday"] == []
