"""
Pytest fixtures for testing
"""
import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from subs_tracker.infrastructure.db.session import Base
from subs_tracker.infrastructure.db import models  # noqa: F401
from subs_tracker.infrastructure.db.repository import SqlSubscriptionRepository


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads (TestClient runs sync routes in a pool)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def repo(db_session):
    return SqlSubscriptionRepository(db_session)


@pytest.fixture
def user_a():
    return uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")


@pytest.fixture
def user_b():
    return uuid.UUID("0b5a3c52-86a5-4b0b-9e4c-2f1d3a7c9e11")
