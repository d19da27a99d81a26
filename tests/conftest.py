"""
Pytest configuration and fixtures.

This module provides:
- an in-memory SQLite database per test for isolation
- a session, a controllable clock and a repository bound to both
- a factory fixture for creating members through the repository
- a FastAPI test client whose database dependency points at the
  in-memory database
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gym_members_api.app.core.db import Base, get_session
from gym_members_api.app.main import create_app
from gym_members_api.app.models import Member
from gym_members_api.app.services.member_service import MemberRepository


class FakeClock:
    """Callable returning a fixed time that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="function")
def test_engine():
    """
    Create an in-memory SQLite engine for each test.

    StaticPool keeps a single connection so that every session (and the
    test client's worker thread) sees the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Session:
    with session_factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository(session, clock) -> MemberRepository:
    return MemberRepository(session, clock=clock)


@pytest.fixture
def member_factory(repository):
    """
    Factory fixture for creating Member rows through the repository.

    Usage:
        member = member_factory(name="John Doe", email="john@example.com")
    """

    def _create_member(
        name: str = "Test Member",
        email: str | None = None,
        phone: str = "555-0000",
        **kwargs,
    ) -> Member:
        # Generate unique email if not provided
        if email is None:
            email = f"test_{uuid.uuid4().hex[:8]}@example.com"
        return repository.create({"name": name, "email": email, "phone": phone, **kwargs})

    return _create_member


@pytest.fixture
def app(session_factory):
    """Application whose requests use the in-memory database."""
    application = create_app()

    def override_get_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_session] = override_get_session
    return application


@pytest.fixture
def client(app) -> TestClient:
    # Not used as a context manager: the lifespan hook would create the
    # configured on-disk database.
    return TestClient(app)
