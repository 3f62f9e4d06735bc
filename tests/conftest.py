"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database patched into
`dashboard.database`, so the app lifespan creates the tables there.
"""
import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from dashboard import database
from dashboard.core.config import Settings, get_settings
from dashboard.main import app
from dashboard.models.log import LogEntry
from dashboard.models.webhook import WebhookLogEntry


class RecordingSubscriber:
    """Relay subscriber that keeps every frame it is handed."""

    def __init__(self):
        self.frames = []

    def deliver(self, frame):
        self.frames.append(frame)

    @property
    def events(self):
        return [json.loads(f[len("data: "):]) for f in self.frames]


class BrokenSubscriber:
    def __init__(self):
        self.attempts = 0

    def deliver(self, frame):
        self.attempts += 1
        raise ConnectionResetError("client went away")


@pytest.fixture
def engine(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    monkeypatch.setattr(database, "engine", engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def settings():
    return Settings(_env_file=None, WEBHOOKS_ENABLED=True, WEBHOOK_URL=None)


@pytest.fixture
def client(engine, settings):
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def listener(client):
    """A subscriber registered on the running app's relay."""
    subscriber = RecordingSubscriber()
    client.app.state.relay.subscribe(subscriber)
    return subscriber


@pytest.fixture
def read_logs(session):
    def _read():
        session.expire_all()
        return session.exec(select(LogEntry).order_by(LogEntry.id)).all()

    return _read


@pytest.fixture
def read_webhooks(session):
    def _read():
        session.expire_all()
        return session.exec(select(WebhookLogEntry).order_by(WebhookLogEntry.id)).all()

    return _read


@pytest.fixture
def auth_payload():
    return {
        "id": "108234567890",
        "email": "a@x.com",
        "name": "Ada Lovelace",
        "gender": "female",
        "birthday": "1990-12-10",
        "password": "YourDefaultPassword",
        "picture": "https://example.com/a.png",
        "verified_email": True,
    }
