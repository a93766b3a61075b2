from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.absence_api.core.validation import AbsenceValidator

# Monday 6 January 2025, 09:00 UTC
FIXED_NOW = datetime(2025, 1, 6, 9, 0, tzinfo=UTC)

__all__ = ["FIXED_NOW", "engine", "session", "fixed_now", "validator"]


@pytest.fixture
def engine() -> Generator[Engine]:
    """In-memory SQLite engine shared by every connection of a test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.absence_api.entities.service.absence import AbsenceTable  # noqa: F401

    # Each test gets a fresh database
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a fresh database session for testing."""
    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def validator(fixed_now: datetime) -> AbsenceValidator:
    """Validator whose clock is frozen at ``fixed_now``."""
    return AbsenceValidator(clock=lambda: fixed_now)
