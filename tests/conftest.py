"""Shared fixtures: a throw-away SQLite database and authenticated clients."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

TEST_DB_PATH = Path(__file__).parent / "splitfy_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from fastapi.testclient import TestClient  # noqa: E402

from splitfy.domain.entities import User  # noqa: E402
from splitfy.infrastructure import database  # noqa: E402
from splitfy.infrastructure.repositories import UserRepository  # noqa: E402
from splitfy.infrastructure.security import create_access_token  # noqa: E402
from splitfy.interfaces.api.dependencies import get_rate_limiter  # noqa: E402


@pytest.fixture(autouse=True)
def clean_database():
    """Recreate every table so each test starts from an empty database."""

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    get_rate_limiter.cache_clear()
    yield
    get_rate_limiter.cache_clear()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Persist a user; keyword arguments override the defaults."""

    counter = {"value": 0}

    def factory(**overrides) -> User:
        counter["value"] += 1
        values = {
            "id": None,
            "email": f"user{counter['value']}@example.com",
            "first_name": f"User{counter['value']}",
            "last_name": "Tester",
        }
        values.update(overrides)
        return UserRepository(session).create(User(**values))

    return factory


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    return auth_headers


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
