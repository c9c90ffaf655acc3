import os

# Keep the application engine away from the on-disk default database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from datetime import datetime, timedelta

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

from school_events.database.db import Base, get_db
from school_events.main import app
from school_events.models.events import EventType, SchoolEvent
from school_events.models.organizers import Organizer

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Give every test a fresh schema."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route the registration lock to an in-process fake Redis."""
    monkeypatch.setattr("school_events.services.registrations.get_redis_client", lambda: fake_redis)
    return fake_redis


@pytest.fixture
def organizer(db_session: Session) -> Organizer:
    organizer = Organizer(name="Maria Petrova", email="m.petrova@school.com", department="Sports")
    db_session.add(organizer)
    db_session.commit()
    db_session.refresh(organizer)
    return organizer


@pytest.fixture
def make_event(db_session: Session, organizer: Organizer):
    """Factory persisting a SchoolEvent with sensible defaults."""

    def _make_event(**overrides) -> SchoolEvent:
        start_at = overrides.pop("start_at", datetime(2025, 6, 12, 10, 0))
        fields = {
            "title": "Football tournament",
            "start_at": start_at,
            "end_at": overrides.pop("end_at", start_at + timedelta(hours=2)),
            "type": EventType.SPORTS.value,
            "location": "Main stadium",
            "capacity": 30,
            "organizer_id": organizer.id,
        }
        fields.update(overrides)
        event = SchoolEvent(**fields)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event
