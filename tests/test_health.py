from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_health_db():
    r = client.get("/health/db")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_health_migrations_basic():
    r = client.get("/health/migrations")
    assert r.status_code == 200
    b = r.json()
    assert b["code_heads"] == ["0001_topics_and_tests"]
    # schema in tests comes from create_all, not alembic
    assert b["db_version"] is None
    assert b["ok"] is False
