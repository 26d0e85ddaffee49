# tests/test_database.py

import pytest

from task_manager import database


@pytest.fixture()
def engine_calls(monkeypatch):
    calls = []

    def recording_create_engine(url, **kwargs):
        calls.append((url, kwargs))
        return object()

    monkeypatch.setattr(database, "create_engine", recording_create_engine)
    return calls


def test_sqlite_engine_allows_use_from_worker_threads(engine_calls):
    database.build_engine("sqlite:///./tasks.db")

    assert engine_calls == [
        ("sqlite:///./tasks.db", {"connect_args": {"check_same_thread": False}}),
    ]


def test_server_database_engine_checks_connections_before_use(engine_calls):
    database.build_engine("postgresql://task:pw@localhost/tasks")

    assert engine_calls == [
        ("postgresql://task:pw@localhost/tasks", {"pool_pre_ping": True}),
    ]
