import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from focusdesk.main import create_app


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


def create_todo_payload(title="Test Task", detail="Do something", priority="medium", tags=None, due_at=None):
    payload = {
        "title": title,
        "detail": detail,
        "priority": priority,
        "tags": tags or [],
    }
    if due_at is not None:
        payload["dueAt"] = due_at
    return payload


def assert_todo_shape(todo: dict):
    for key in ["id", "title", "completed", "createdAt", "updatedAt"]:
        assert key in todo
    for key in ["detail", "priority", "tags", "plannedAt", "dueAt", "completedAt"]:
        assert key in todo
    assert isinstance(todo["id"], str)
    assert isinstance(todo["title"], str)
    assert isinstance(todo["completed"], bool)
    datetime.fromisoformat(todo["createdAt"])
    datetime.fromisoformat(todo["updatedAt"])


class TestStartup:
    def test_logging_is_configured_on_startup_only(self, store, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        app = create_app(store=store)
        assert calls == []

        with TestClient(app) as client:
            assert client.get("/").status_code == 200
        assert len(calls) == 1


class TestHealth:
    def test_health_check(self, client, store):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["dataDir"] == str(store.data_dir)


class TestTodos:
    def test_create_todo_minimal(self, client):
        res = client.post("/api/v1/todos", json=create_todo_payload(title="Buy milk", detail=None))
        assert res.status_code == 201
        todo = res.json()
        assert_todo_shape(todo)
        assert todo["title"] == "Buy milk"
        assert todo["detail"] is None
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    def test_list_returns_created_items_in_order(self, client):
        first = client.post("/api/v1/todos", json=create_todo_payload(title="First")).json()
        second = client.post("/api/v1/todos", json=create_todo_payload(title="Second", due_at="2099-12-25T00:00:00Z")).json()

        res = client.get("/api/v1/todos")
        assert res.status_code == 200
        items = res.json()
        assert [t["id"] for t in items] == [first["id"], second["id"]]
        assert items[1]["dueAt"] == "2099-12-25T00:00:00Z"

    def test_toggle_complete_and_back(self, client):
        tid = client.post("/api/v1/todos", json=create_todo_payload(title="Toggle me")).json()["id"]

        res = client.post(f"/api/v1/todos/{tid}/toggle", json={"completed": True})
        assert res.status_code == 200
        assert res.json()["completed"] is True
        assert res.json()["completedAt"] is not None

        (listed,) = client.get("/api/v1/todos").json()
        assert listed["completed"] is True

        res = client.post(f"/api/v1/todos/{tid}/toggle", json={"completed": False})
        assert res.json()["completedAt"] is None

    def test_put_replace_todo(self, client):
        created = client.post("/api/v1/todos", json=create_todo_payload(title="Initial", detail="A")).json()
        replacement = dict(created, title="Replaced", detail=None, priority="high")

        res_put = client.put(f"/api/v1/todos/{created['id']}", json=replacement)
        assert res_put.status_code == 200
        updated = res_put.json()
        assert updated["id"] == created["id"]
        assert updated["title"] == "Replaced"
        assert updated["detail"] is None
        assert updated["priority"] == "high"
        assert updated["createdAt"] == created["createdAt"]

        res_put_nf = client.put("/api/v1/todos/424242", json=dict(replacement, id="424242"))
        assert res_put_nf.status_code == 404
        assert res_put_nf.json()["error"] == "NotFoundError"

    def test_put_with_mismatched_id(self, client):
        created = client.post("/api/v1/todos", json=create_todo_payload(title="Mismatch")).json()
        res = client.put("/api/v1/todos/other", json=created)
        assert res.status_code == 400

    def test_delete_todo(self, client):
        tid = client.post("/api/v1/todos", json=create_todo_payload(title="ToDelete")).json()["id"]

        res_del = client.delete(f"/api/v1/todos/{tid}")
        assert res_del.status_code == 204
        assert res_del.text == ""
        assert client.get("/api/v1/todos").json() == []

        res_del_again = client.delete(f"/api/v1/todos/{tid}")
        assert res_del_again.status_code == 404
        assert res_del_again.json()["error"] == "NotFoundError"

    def test_toggle_unknown_is_404(self, client):
        res = client.post("/api/v1/todos/ghost/toggle", json={"completed": True})
        assert res.status_code == 404


class TestPomodoro:
    def test_config_defaults_and_save(self, client):
        assert client.get("/api/v1/pomodoro/config").json() == {
            "focusMinutes": 25,
            "shortBreakMinutes": 5,
            "longBreakMinutes": 15,
            "longBreakInterval": 4,
            "autoStartNext": False,
        }
        res = client.put("/api/v1/pomodoro/config", json={"focusMinutes": 50, "autoStartNext": True})
        assert res.status_code == 200
        assert client.get("/api/v1/pomodoro/config").json()["focusMinutes"] == 50

    def test_zero_focus_is_rejected(self, client):
        res = client.put("/api/v1/pomodoro/config", json={"focusMinutes": 0})
        assert res.status_code == 422
        body = res.json()
        assert body["error"] == "ValidationError"
        assert client.get("/api/v1/pomodoro/config").json()["focusMinutes"] == 25

    def test_append_and_list_sessions(self, client):
        res = client.post(
            "/api/v1/pomodoro/sessions",
            json={
                "startAt": "2024-01-01T10:00:00Z",
                "endAt": "2024-01-01T10:25:00Z",
                "type": "focus",
                "completed": True,
            },
        )
        assert res.status_code == 201
        session = res.json()
        assert session["durationMinutes"] == 25
        assert session["type"] == "focus"

        client.post(
            "/api/v1/pomodoro/sessions",
            json={"startAt": "2024-01-02T08:00:00Z", "type": "shortBreak", "completed": False},
        )

        assert len(client.get("/api/v1/pomodoro/sessions").json()) == 2
        filtered = client.get("/api/v1/pomodoro/sessions", params={"date": "2024-01-01"}).json()
        assert [s["id"] for s in filtered] == [session["id"]]

    def test_bad_start_time_is_rejected(self, client):
        res = client.post(
            "/api/v1/pomodoro/sessions",
            json={"startAt": "not-a-time", "type": "focus", "completed": True},
        )
        assert res.status_code == 422
        assert res.json()["error"] == "ValidationError"

    def test_bad_session_kind_is_a_request_validation_error(self, client):
        res = client.post(
            "/api/v1/pomodoro/sessions",
            json={"startAt": "2024-01-01T10:00:00Z", "type": "nap", "completed": True},
        )
        assert res.status_code == 422
        assert res.json()["message"] == "Request validation failed"
        assert isinstance(res.json()["detail"], list)


class TestSettings:
    def test_get_and_save(self, client):
        settings = client.get("/api/v1/settings").json()
        assert settings["floatingOpacity"] == 0.95
        assert settings["theme"] == "mac"

        settings["theme"] = "dark"
        res = client.put("/api/v1/settings", json=settings)
        assert res.status_code == 200
        assert client.get("/api/v1/settings").json()["theme"] == "dark"

    def test_record_window_state_and_placement(self, client):
        res = client.put("/api/v1/settings/window-state/main", json={"x": 40, "y": 30, "width": 900, "height": 700})
        assert res.status_code == 200
        assert res.json()["windowState"]["main"]["width"] == 900

        placement = client.get("/api/v1/settings/window-state/main/placement").json()
        assert placement == {"center": False, "x": 40, "y": 30, "width": 900, "height": 700}

    def test_off_screen_geometry_is_centered_on_restore(self, client):
        client.put("/api/v1/settings/window-state/floating", json={"x": -32000, "y": -32000})
        placement = client.get("/api/v1/settings/window-state/floating/placement").json()
        assert placement["center"] is True
        assert placement["x"] is None

    def test_unknown_window_label(self, client):
        res = client.put("/api/v1/settings/window-state/sidebar", json={"x": 1})
        assert res.status_code == 422
        assert res.json()["error"] == "ValidationError"


class TestStorageFailures:
    def test_corrupt_document_is_a_500(self, client, store):
        (store.data_dir / "todos.json").write_text("{oops", encoding="utf-8")
        res = client.get("/api/v1/todos")
        assert res.status_code == 500
        assert res.json()["error"] == "CodecError"

    def test_non_utf8_document_is_a_500(self, client, store):
        (store.data_dir / "settings.json").write_bytes(b'{"theme": "\xff"}')
        res = client.get("/api/v1/settings")
        assert res.status_code == 500
        assert res.json()["error"] == "CodecError"
