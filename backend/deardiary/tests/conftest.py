"""
Pytest fixtures: in-memory database, test client and a fake reply generator.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deardiary.core.config import settings
from deardiary.db.base import Base
from deardiary.db.session import get_db
from deardiary.api.dependencies import get_reply_generator
from deardiary.main import app
import deardiary.models  # noqa: F401

FAKE_REPLY = "You are not alone."


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Lowest bcrypt cost keeps the suite fast."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


class FakeReplyGenerator:
    """Records calls and returns a fixed reply, or raises a given error."""

    def __init__(self, reply=FAKE_REPLY, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def __call__(self, content, api_key):
        self.calls.append((content, api_key))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def reply_generator():
    return FakeReplyGenerator()


@pytest.fixture
def client(engine, reply_generator):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reply_generator] = lambda: reply_generator
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


def register(client, email="test@example.com", name="Tester", password="secret123"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": password},
    )
