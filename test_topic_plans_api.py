from datetime import datetime, timedelta


def test_plan_without_assignment_uses_defaults(client, auth_headers):
    response = client.post("/topic-plans/", json={"topic": "Bridge design"}, headers=auth_headers)
    assert response.status_code == 201
    plan = response.json()

    assert plan["topic_type"] == "design"
    assert plan["total_hours"] == 2
    assert plan["outline"][0] == "Problem Definition"
    assert len(plan["key_questions"]) == 7
    assert len(plan["queries"]) == 6
    assert len(plan["steps"]) == 8
    assert plan["steps"][3]["text"] == "Develop and compare concepts"

    due = datetime.fromisoformat(plan["due"])
    assert timedelta(days=2, hours=23) < due - datetime.utcnow() <= timedelta(days=3)


def test_plan_takes_effort_and_due_from_assignment(client, auth_headers):
    assignment = client.post(
        "/assignments/",
        json={"title": "Market report", "due": "2030-06-01T09:00:00", "effort": 14},
        headers=auth_headers,
    ).json()
    plan = client.post("/topic-plans/", json={"topic": "Market report", "assignment_id": assignment["id"]}, headers=auth_headers).json()

    assert plan["assignment_id"] == assignment["id"]
    assert plan["topic_type"] == "report"
    assert plan["total_hours"] == 14
    assert plan["due"] == "2030-06-01T09:00:00"
    assert [s["duration"] for s in plan["steps"]] == [1.0, 2.0, 1.0, 2.0, 3.0, 2.0, 2.0, 1.0]
    assert len(plan["key_questions"]) == 6


def test_unknown_assignment_is_404(client, auth_headers):
    response = client.post("/topic-plans/", json={"topic": "x", "assignment_id": 999}, headers=auth_headers)
    assert response.status_code == 404


def test_list_and_get(client, auth_headers):
    created = client.post("/topic-plans/", json={"topic": "Neural networks"}, headers=auth_headers).json()
    assert created["topic_type"] == "research"

    plans = client.get("/topic-plans/", headers=auth_headers).json()
    assert [p["id"] for p in plans] == [created["id"]]
    assert client.get(f"/topic-plans/{created['id']}", headers=auth_headers).json() == created
    assert client.get("/topic-plans/12345", headers=auth_headers).status_code == 404
