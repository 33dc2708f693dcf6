import json
import logging
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from gym_api import repositories
from gym_api.config import Settings
from gym_api.database import get_session
from gym_api.errors import StorageFault
from gym_api.main import create_app


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_health_reports_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert _parse_ts(body["timestamp"]).tzinfo is not None


def test_request_id_header_is_echoed_or_generated(client):
    r = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"
    r2 = client.get("/health")
    assert r2.headers["X-Request-ID"]


def test_list_on_empty_store_returns_empty_array(client):
    r = client.get("/workouts")
    assert r.status_code == 200
    assert r.json() == []


def test_create_workout_returns_created_record(client):
    before = datetime.now(timezone.utc).replace(microsecond=0)
    r = client.post("/workouts", json={"name": "Push Day"})
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Push Day"
    assert body["id"]
    assert _parse_ts(body["createdAt"]) >= before
    assert set(body) == {"id", "name", "createdAt"}


def test_create_with_empty_name_is_rejected(client):
    r = client.post("/workouts", json={"name": ""})
    assert r.status_code == 400
    body = r.json()
    assert body["statusCode"] == 400
    assert body["error"] == "ValidationError"
    assert body["message"] == "Invalid request body"
    assert body["issues"] == [{"path": "name", "message": "Workout name is required"}]
    assert client.get("/workouts").json() == []


def test_create_with_long_name_is_rejected(client):
    r = client.post("/workouts", json={"name": "A" * 121})
    assert r.status_code == 400
    assert r.json()["issues"][0]["message"] == "Workout name must be 120 characters or less"


def test_create_without_body_is_rejected(client):
    r = client.post("/workouts")
    assert r.status_code == 400
    assert r.json()["error"] == "ValidationError"
    assert r.json()["issues"]


def test_create_with_malformed_json_is_rejected(client):
    r = client.post("/workouts", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "ValidationError"
    assert body["issues"]


def test_list_returns_newest_first(client):
    first = client.post("/workouts", json={"name": "Push Day"}).json()
    second = client.post("/workouts", json={"name": "Pull Day"}).json()
    r = client.get("/workouts")
    assert r.status_code == 200
    ids = [w["id"] for w in r.json()]
    assert ids == [second["id"], first["id"]]


def test_duplicate_names_create_separate_records(client):
    a = client.post("/workouts", json={"name": "Legs"}).json()
    b = client.post("/workouts", json={"name": "Legs"}).json()
    assert a["id"] != b["id"]
    assert len(client.get("/workouts").json()) == 2


def test_unknown_route_uses_error_shape(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"statusCode": 404, "error": "Not Found", "message": "Not Found"}


def test_storage_fault_hides_internal_detail(app):
    app.dependency_overrides[get_session] = lambda: _BrokenSession()
    with TestClient(app) as c:
        listed = c.get("/workouts")
        created = c.post("/workouts", json={"name": "Push Day"})
    expected = {"statusCode": 500, "error": "StorageFault", "message": "Storage unavailable"}
    assert listed.status_code == 500
    assert listed.json() == expected
    assert created.status_code == 500
    assert created.json() == expected


def test_repository_wraps_database_errors():
    repo = repositories.WorkoutRepository(_BrokenSession())
    with pytest.raises(StorageFault) as info:
        repo.list()
    assert isinstance(info.value.__cause__, OperationalError)


def test_unexpected_error_is_normalized(app, monkeypatch):
    def explode(self, payload):
        raise RuntimeError("something broke")

    monkeypatch.setattr("gym_api.services.WorkoutService.create_workout", explode)
    with TestClient(app) as c:
        r = c.post("/workouts", json={"name": "Push Day"})
    assert r.status_code == 500
    assert r.json() == {"statusCode": 500, "error": "RuntimeError", "message": "something broke"}


class _BrokenSession:
    """Session stand-in whose database is gone."""

    def exec(self, stmt):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    def rollback(self):
        pass


def _log_payloads(caplog, event):
    prefix = event + " "
    return [
        json.loads(r.getMessage()[len(prefix):])
        for r in caplog.records
        if r.name == "gym_api.api" and r.getMessage().startswith(prefix)
    ]


def test_request_done_is_logged_with_context(client, caplog):
    caplog.set_level(logging.INFO, logger="gym_api.api")
    client.post("/workouts", json={"name": "Push Day"}, headers={"X-Request-ID": "req-1"})
    payloads = _log_payloads(caplog, "request_done")
    assert len(payloads) == 1
    entry = payloads[0]
    assert set(entry) == {"request_id", "path", "method", "client", "status_code", "duration_ms"}
    assert entry["request_id"] == "req-1"
    assert entry["path"] == "/workouts"
    assert entry["method"] == "POST"
    assert entry["status_code"] == 201
    assert entry["duration_ms"] >= 0


def test_unexpected_error_keeps_cors_and_request_id(tmp_path, monkeypatch, caplog):
    def explode(self, payload):
        raise RuntimeError("something broke")

    monkeypatch.setattr("gym_api.services.WorkoutService.create_workout", explode)
    caplog.set_level(logging.INFO, logger="gym_api.api")
    app = create_app(Settings(
        cors_origins=["http://app.test"],
        database_url=f"sqlite:///{tmp_path / 'fault.db'}",
    ))
    with TestClient(app) as c:
        r = c.post(
            "/workouts",
            json={"name": "Push Day"},
            headers={"Origin": "http://app.test", "X-Request-ID": "r1"},
        )
    assert r.status_code == 500
    assert r.json()["error"] == "RuntimeError"
    assert r.headers["X-Request-ID"] == "r1"
    assert r.headers["access-control-allow-origin"] == "http://app.test"

    failed = _log_payloads(caplog, "request_failed")
    assert len(failed) == 1
    assert failed[0]["request_id"] == "r1"
    assert failed[0]["status_code"] == 500
    assert _log_payloads(caplog, "request_done") == []
