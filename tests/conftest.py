from __future__ import annotations

from typing import Callable, Dict

import bcrypt
import pytest
from fastapi.testclient import TestClient

from task_tracker.database import create_db_engine, create_tables, get_db, make_session_factory
from task_tracker.main import app
from task_tracker.services import passwords

_real_gensalt = bcrypt.gensalt


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost keeps the suite fast; hashing logic is unchanged."""
    monkeypatch.setattr(passwords.bcrypt, "gensalt", lambda: _real_gensalt(rounds=4))


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test.

    The engine keeps a single connection so every session sees the same data.
    """
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def signup(client) -> Callable[..., Dict[str, str]]:
    """Register a user through the API and return its Authorization header."""

    def _signup(email: str = "ann@example.com", password: str = "secret1", name: str = "Ann"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _signup
