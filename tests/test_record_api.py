"""HTTP behaviour of the generic record routes."""

import pytest
from fastapi.testclient import TestClient

from Data.collections import routed_collections
from Data.database import today


def test_task_lifecycle(client):
    created = client.post("/api/tasks", json={"text": "Buy milk", "order": 0})
    assert created.status_code == 201
    task = created.json()
    assert task["completed"] is False

    tasks = client.get("/api/tasks").json()
    assert [t["id"] for t in tasks] == [task["id"]]

    toggled = client.patch(f"/api/tasks/{task['id']}", json={"completed": True})
    assert toggled.status_code == 200
    assert toggled.json()["id"] == task["id"]
    assert toggled.json()["completed"] is True
    assert toggled.json()["text"] == "Buy milk"

    deleted = client.delete(f"/api/tasks/{task['id']}")
    assert deleted.json() == {"success": True}
    assert client.get("/api/tasks").json() == []


def test_put_is_a_partial_update_too(client):
    goal = client.post("/api/goals", json={
        "title": "Read", "type": "weekly", "deadline": "2025-12-31"
    }).json()
    updated = client.put(f"/api/goals/{goal['id']}", json={"progress": 40})
    assert updated.status_code == 200
    assert updated.json()["progress"] == 40
    assert updated.json()["title"] == "Read"


def test_update_unknown_id_is_404(client):
    response = client.patch("/api/tasks/nope", json={"completed": True})
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}
    assert client.get("/api/tasks").json() == []


def test_delete_twice(client):
    habit = client.post("/api/habits", json={"name": "Stretch"}).json()
    assert client.delete(f"/api/habits/{habit['id']}").status_code == 200
    second = client.delete(f"/api/habits/{habit['id']}")
    assert second.status_code == 404
    assert second.json() == {"error": "Habit not found"}


def test_invalid_payload_is_400_with_details(client):
    response = client.post("/api/tasks", json={"completed": "sometimes"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid task data"
    locs = [d["loc"] for d in body["details"]]
    assert ["text"] in locs
    assert ["completed"] in locs


def test_malformed_json_is_400(client):
    response = client.post(
        "/api/tasks",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request data"


def test_non_object_body_is_400(client):
    response = client.post("/api/tasks", json=["Buy milk"])
    assert response.status_code == 400


def test_client_user_id_is_ignored(client, settings):
    task = client.post("/api/tasks", json={"text": "x", "userId": "mallory"}).json()
    assert task["userId"] == settings.DEFAULT_USER_ID


def test_other_user_never_sees_records(client_for):
    alice = client_for(DEFAULT_USER_ID="alice")
    bob = client_for(DEFAULT_USER_ID="bob")

    task = alice.post("/api/tasks", json={"text": "private"}).json()

    assert bob.get("/api/tasks").json() == []
    assert bob.patch(f"/api/tasks/{task['id']}", json={"text": "hijack"}).status_code == 404
    assert bob.delete(f"/api/tasks/{task['id']}").status_code == 404
    assert alice.get("/api/tasks").json()[0]["text"] == "private"


def test_sql_backend_serves_the_same_api(client_for):
    client = client_for(shared_store=False, STORE_BACKEND="sql",
                        DATABASE_URL="sqlite://", SEED_SAMPLE_DATA=True)

    assert client.get("/api/settings").json()["userName"] == "Alex"
    assert client.get("/api/habits").json()[0]["name"] == "Morning meditation"

    task = client.post("/api/tasks", json={"text": "Persist me"}).json()
    client.patch(f"/api/tasks/{task['id']}", json={"completed": True})
    assert client.get("/api/tasks").json()[0]["completed"] is True
    assert client.delete(f"/api/tasks/{task['id']}").json() == {"success": True}
    assert client.get("/api/tasks").json() == []


def test_schedule_query_by_date(client):
    client.post("/api/schedule", json={"title": "Today", "time": "09:00", "date": today()})
    client.post("/api/schedule", json={"title": "Other", "time": "09:00", "date": "2030-01-01"})

    assert [e["title"] for e in client.get("/api/schedule").json()] == ["Today"]
    other = client.get("/api/schedule", params={"date": "2030-01-01"}).json()
    assert [e["title"] for e in other] == ["Other"]


@pytest.mark.parametrize("collection", routed_collections(), ids=lambda c: c.path)
def test_every_collection_lists(client, collection):
    response = client.get(f"/api/{collection.path}")
    assert response.status_code == 200
    assert isinstance(response.json(), list)


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.json()


def test_unexpected_failure_is_500(app, store, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store, "list", broken)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/tasks")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_failed_request_is_logged(app, store, monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store, "list", broken)
    TestClient(app, raise_server_exceptions=False).get("/api/tasks")

    messages = [record.getMessage() for record in caplog.records]
    assert any("Request failed" in m and "status_code=500" in m for m in messages)


def test_importing_the_package_builds_no_app():
    import presentation

    assert not hasattr(presentation, "app")


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
