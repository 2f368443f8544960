"""
Tests for engine/session wiring
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from subs_tracker.config import Settings
from subs_tracker.infrastructure.db import session as db_session_module
from subs_tracker.main import app


@pytest.fixture
def sqlite_settings(monkeypatch):
    settings = Settings(DATABASE_URL="sqlite://", DEBUG=False)
    monkeypatch.setattr(db_session_module, "get_settings", lambda: settings)
    db_session_module.dispose_engine()
    yield settings
    db_session_module.dispose_engine()


def test_build_engine_sqlite_uses_static_pool():
    engine = db_session_module.build_engine(Settings(DATABASE_URL="sqlite://"))
    try:
        assert engine.dialect.name == "sqlite"
        assert type(engine.pool).__name__ == "StaticPool"
    finally:
        engine.dispose()


def test_build_engine_postgres_uses_psycopg():
    engine = db_session_module.build_engine(Settings(DATABASE_URL="postgresql://u:p@localhost:5432/subs"))
    assert engine.dialect.name == "postgresql"
    assert engine.dialect.driver == "psycopg"
    assert engine.pool._pre_ping is True


def test_engine_is_singleton_until_disposed(sqlite_settings):
    first = db_session_module.get_engine()
    assert db_session_module.get_engine() is first
    db_session_module.dispose_engine()
    assert db_session_module.get_engine() is not first


def test_get_db_yields_and_closes(sqlite_settings):
    gen = db_session_module.get_db()
    db = next(gen)
    assert db.execute(text("SELECT 1")).scalar() == 1
    with pytest.raises(StopIteration):
        next(gen)


def test_ready_endpoint_checks_database(sqlite_settings):
    db_session_module.check_db_connection()
    response = TestClient(app).get("/ready")
    assert response.status_code == 200
    assert response.text == "ok"
