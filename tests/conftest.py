"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = os.environ.get("DATABASE_URL") or "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = os.environ.get("LOG_LEVEL") or "INFO"

from workout_api.logging_config import configure_logging

configure_logging()

from workout_api.database import Base, get_db
from workout_api.main import app
from workout_api.models.database_models import Exercise, Workout

USER_A = uuid.UUID("11111111-1111-1111-1111-111111111111")
USER_B = uuid.UUID("22222222-2222-2222-2222-222222222222")


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Create in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, future=True)
    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def test_client(db_session: Session) -> Iterator[TestClient]:
    """Provide a FastAPI test client bound to the in-memory database."""

    def override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> uuid.UUID:
    return USER_A


@pytest.fixture
def other_user_id() -> uuid.UUID:
    return USER_B


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers identifying USER_A as the caller."""
    return {"X-User-Id": str(USER_A)}


@pytest.fixture
def add_workout(db_session: Session) -> Callable[..., Workout]:
    """Insert a workout directly, bypassing the create endpoint."""

    def _add(
        name: str,
        date: datetime,
        user_id: uuid.UUID = USER_A,
        exercises: list[str] | None = None,
        is_shared: bool = False,
    ) -> Workout:
        workout = Workout(
            name=name,
            date=date,
            user_id=user_id,
            is_shared=is_shared,
            exercises=[
                Exercise(position=i, name=ex, sets=3, reps=10, weight=Decimal("20.00"))
                for i, ex in enumerate(exercises or [])
            ],
        )
        db_session.add(workout)
        db_session.commit()
        return workout

    return _add
