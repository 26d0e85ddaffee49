# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from main import create_app
from task_manager.config import Settings
from task_manager.database import init_db

from .helpers import register_user


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings isolated per test: a fresh SQLite file, a signing secret no
    other test shares, and a cheap bcrypt cost so hashing stays fast.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
        jwt_secret=f"test-secret-{tmp_path.name}",
        bcrypt_rounds=4,
        cors_origins=[],
        log_level="DEBUG",
    )


@pytest.fixture()
def app(settings: Settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app):
    init_db(app.state.engine)
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def token_service(app):
    return app.state.token_service


@pytest.fixture()
def ann(client):
    """A registered user: (user dict, token)"""
    return register_user(client, name="Ann", email="ann@x.com", password="secret1")


@pytest.fixture()
def bob(client):
    return register_user(client, name="Bob", email="bob@x.com", password="secret2")
