"""Tests for database URL building and lazy engine setup."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

import database
from shared.config import config as service_config


@pytest.fixture
def fresh_engine(monkeypatch):
    monkeypatch.setattr(database, "_engine", None)
    yield
    database.reset_engine()


def test_postgres_scheme_is_normalised(monkeypatch):
    monkeypatch.setitem(service_config.config, "database_url", "postgres://u:p@db:5432/grammar")

    assert database.build_database_url() == "postgresql://u:p@db:5432/grammar"


def test_url_built_from_components(monkeypatch):
    monkeypatch.setitem(service_config.config, "database_url", None)
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_NAME", "checks")
    monkeypatch.setenv("DB_SSLMODE", "require")

    url = database.build_database_url()

    assert url.startswith("postgresql://")
    assert "@db.internal:" in url
    assert url.endswith("/checks?sslmode=require")


def test_failed_connection_is_retried_on_next_use(monkeypatch, tmp_path, fresh_engine):
    monkeypatch.setitem(service_config.config, "database_url", f"sqlite:///{tmp_path / 'retry.db'}")
    real_create = database.create_database_engine
    attempts = []

    def flaky_create():
        attempts.append(1)
        if len(attempts) == 1:
            raise OperationalError("SELECT 1", {}, Exception("database is down"))
        return real_create()

    monkeypatch.setattr(database, "create_database_engine", flaky_create)

    with pytest.raises(OperationalError):
        database.get_engine()
    assert database._engine is None

    engine = database.get_engine()
    assert engine is database.get_engine()
    assert len(attempts) == 2


def test_get_db_yields_working_session(monkeypatch, tmp_path, fresh_engine):
    monkeypatch.setitem(service_config.config, "database_url", f"sqlite:///{tmp_path / 'session.db'}")

    sessions = database.get_db()
    db = next(sessions)
    try:
        assert db.execute(text("SELECT 1")).scalar() == 1
    finally:
        sessions.close()


def test_init_database_creates_tables(monkeypatch, tmp_path, fresh_engine):
    monkeypatch.setitem(service_config.config, "database_url", f"sqlite:///{tmp_path / 'init.db'}")

    database.init_database()

    tables = set(database.Base.metadata.tables)
    with database.get_engine().connect() as conn:
        names = {row[0] for row in conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))}
    assert {"users", "grammar_history"} <= tables <= names
