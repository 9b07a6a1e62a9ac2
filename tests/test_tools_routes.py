from fastapi.testclient import TestClient

import config
import main
from db import database
from main import app


def test_list_tools_describes_all_six(conn):
    response = TestClient(app).get("/tools")
    assert response.status_code == 200
    tools = {tool["name"]: tool for tool in response.json()}
    assert set(tools) == {
        "create_study_item",
        "update_study_performance",
        "search_study_items",
        "get_items_for_review",
        "get_study_types",
        "get_learning_stats",
    }
    create_schema = tools["create_study_item"]["inputSchema"]
    assert set(create_schema["required"]) == {"userId", "type", "content", "level"}
    assert "recallStrength" in tools["update_study_performance"]["inputSchema"]["properties"]


def test_create_then_review_then_stats(conn):
    client = TestClient(app)
    created = client.post(
        "/tools/create_study_item",
        json={"userId": "alice", "type": "vocab", "content": "der Baum", "level": "A2", "tags": ["x"]},
    )
    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True

    with database.get_conn() as check:
        row = check.execute(
            "SELECT next_review, created_at, recall_strength FROM study_items WHERE id = ?",
            (body["id"],),
        ).fetchone()
    assert row["recall_strength"] == "weak"
    assert row["next_review"] - row["created_at"] == 3600

    updated = client.post(
        "/tools/update_study_performance",
        json={"id": body["id"], "userId": "alice", "recallStrength": "strong"},
    )
    assert updated.json() == {"success": True}

    found = client.post("/tools/search_study_items", json={"userId": "alice", "tags": ["x", "q"]})
    assert [item["id"] for item in found.json()] == [body["id"]]
    assert found.json()[0]["recallStrength"] == "strong"
    assert found.json()[0]["nextReview"] - found.json()[0]["lastReviewed"] == 72 * 3600

    types = client.post("/tools/get_study_types", json={"userId": "alice"})
    assert types.json() == ["vocab"]

    stats = client.post("/tools/get_learning_stats", json={"userId": "alice"}).json()
    assert stats["total"] == 1
    assert stats["byRecallStrength"]["strong"] == 1
    assert stats["reviewedToday"] == 1
    assert stats["dueForReview"] == 0


def test_invalid_level_is_rejected_by_schema(conn):
    response = TestClient(app).post(
        "/tools/create_study_item",
        json={"userId": "alice", "type": "vocab", "content": "x", "level": "Z9"},
    )
    assert response.status_code == 422


def test_missing_required_input_is_rejected_by_schema(conn):
    response = TestClient(app).post(
        "/tools/update_study_performance",
        json={"id": "abc", "userId": "alice"},
    )
    assert response.status_code == 422


def test_bad_due_before_is_a_structured_error(conn):
    response = TestClient(app).post(
        "/tools/get_items_for_review",
        json={"userId": "alice", "dueBefore": "yesterday-ish"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is False


def test_due_before_far_future_returns_new_items(conn):
    client = TestClient(app)
    client.post(
        "/tools/create_study_item",
        json={"userId": "alice", "type": "vocab", "content": "x", "level": "easy"},
    )
    assert client.post("/tools/get_items_for_review", json={"userId": "alice"}).json() == []
    due = client.post(
        "/tools/get_items_for_review",
        json={"userId": "alice", "dueBefore": "2999-01-01T00:00:00Z"},
    ).json()
    assert len(due) == 1


def test_update_for_other_user_reports_failure(conn):
    client = TestClient(app)
    item_id = client.post(
        "/tools/create_study_item",
        json={"userId": "bob", "type": "vocab", "content": "x", "level": "hard"},
    ).json()["id"]
    response = client.post(
        "/tools/update_study_performance",
        json={"id": item_id, "userId": "alice", "recallStrength": "strong"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is False


def test_health_reports_schema_version(conn):
    response = TestClient(app).get("/health")
    assert response.json() == {"status": "ok", "schemaVersion": database.SCHEMA_VERSION}


def test_startup_loads_intervals_once(conn):
    with TestClient(app) as client:
        assert app.state.intervals == {"weak": 1.0, "medium": 24.0, "strong": 72.0}
        config.CONFIG_PATH.write_text(
            "[spaced_repetition]\nweak_interval_hours = 48\n", encoding="utf-8"
        )
        response = client.post(
            "/tools/create_study_item",
            json={"userId": "alice", "type": "vocab", "content": "x", "level": "A1"},
        )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    with database.get_conn() as check:
        row = check.execute(
            "SELECT next_review, created_at FROM study_items WHERE id = ?", (body["id"],)
        ).fetchone()
    assert row["next_review"] - row["created_at"] == 3600


def test_intervals_are_cached_without_lifespan(conn):
    client = TestClient(app)
    payload = {"userId": "alice", "type": "vocab", "content": "x", "level": "A1"}
    assert client.post("/tools/create_study_item", json=payload).json()["success"] is True
    config.CONFIG_PATH.write_text("not = [valid toml", encoding="utf-8")
    response = client.post("/tools/create_study_item", json=payload)
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_resolve_server_options_prefers_command_line(config_dir):
    config.CONFIG_PATH.write_text(
        '[server]\nhost = "0.0.0.0"\nport = 9100\n\n[logging]\nlevel = "debug"\n',
        encoding="utf-8",
    )
    assert main.resolve_server_options() == {"host": "0.0.0.0", "port": 9100, "log_level": "DEBUG"}
    assert main.resolve_server_options("localhost", 7000)["host"] == "localhost"
    assert main.resolve_server_options("localhost", 7000)["port"] == 7000


def test_health_before_init_reports_zero(config_dir):
    assert TestClient(app).get("/health").json() == {"status": "ok", "schemaVersion": 0}
