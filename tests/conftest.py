"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("USE_MOCK_AI", "true")

from collections.abc import Generator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from typing import Any  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import tencards.models  # noqa: E402, F401
from tencards.core import container  # noqa: E402
from tencards.database import Base, get_db  # noqa: E402
from tencards.infrastructure.ai.ai_service import AIGenerationService  # noqa: E402
from tencards.main import app  # noqa: E402
from tencards.models import Deck  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def ai_service() -> AIGenerationService:
    """Offline generation without simulated latency."""
    return AIGenerationService(use_mock=True, mock_min_latency_ms=0, mock_max_latency_ms=0)


@pytest.fixture
def client(db_session: Session, ai_service: AIGenerationService) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    container.ai_flashcard_service.override(ai_service)

    with TestClient(app) as test_client:
        yield test_client

    container.ai_flashcard_service.reset_override()
    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers(user_id: UUID) -> dict[str, str]:
    return {"X-User-Id": str(user_id)}


def create_test_deck(
    db_session: Session, user_id: UUID, name: str = "Biology", updated_at: datetime | None = None
) -> Deck:
    """Create a test deck."""
    now = updated_at or datetime.now(UTC)
    deck = Deck(user_id=user_id, name=name, created_at=now, updated_at=now)
    db_session.add(deck)
    db_session.commit()
    db_session.refresh(deck)
    return deck


@pytest.fixture
def test_deck(db_session: Session, user_id: UUID) -> Deck:
    return create_test_deck(db_session, user_id)


@pytest.fixture
def make_deck(db_session: Session) -> Any:
    """Factory for decks owned by arbitrary users."""

    def _make(owner_id: UUID, name: str = "Deck", updated_at: datetime | None = None) -> Deck:
        return create_test_deck(db_session, owner_id, name=name, updated_at=updated_at)

    return _make
