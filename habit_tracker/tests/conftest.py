"""
Shared fixtures for habit tracker tests.
"""
import os
import tempfile

# Keep test runs away from the real database and log directory
os.environ.setdefault("HABIT_TRACKER_DB_PATH", ":memory:")
os.environ.setdefault("HABIT_TRACKER_LOG_DIR", tempfile.mkdtemp(prefix="habit-tracker-logs-"))
os.environ.pop("HABIT_TRACKER_TRACK_ENDPOINT", None)

import pytest
from datetime import date, datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from habit_tracker.database import Base, get_db
from habit_tracker import models  # noqa: F401  registers tables
from habit_tracker.schemas import Habit, HabitSchedule
from habit_tracker.services.habit_store import HabitStore


@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def tuesday():
    """2026-01-27 is a Tuesday"""
    return date(2026, 1, 27)


@pytest.fixture
def tuesday_morning():
    return datetime(2026, 1, 27, 9, 30, 0)


@pytest.fixture
def mon_wed_schedule():
    return HabitSchedule(frequency="weekly", days=[1, 3])


def make_habit(habit_id: str = "1", name: str = "Drink Water", **kwargs) -> Habit:
    """Build a habit with sensible defaults"""
    kwargs.setdefault("schedule", HabitSchedule(frequency="daily"))
    return Habit(id=habit_id, name=name, **kwargs)


@pytest.fixture
def store():
    return HabitStore([make_habit()])


@pytest.fixture
def api_client(db_session):
    """Habit API client backed by the per-test database"""
    from habit_tracker.main import app

    app.dependency_overrides[get_db] = lambda: db_session
    app.state.store = None
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    app.state.store = None


@pytest.fixture
def metrics_client():
    """Event counter client with a fresh registry"""
    from habit_tracker.metrics_server import create_metrics_app

    with TestClient(create_metrics_app()) as client:
        yield client
