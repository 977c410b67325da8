"""Tests for the generate, accept and history endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from starlette import status

from tencards.config import get_settings
from tencards.core import container
from tencards.infrastructure.ai.ai_service import AIGenerationService
from tencards.models import Deck, Flashcard, Generation, GenerationErrorLog

SOURCE_TEXT = "Photosynthesis converts light energy into chemical energy. " * 20


def generate(client: TestClient, deck: Deck, headers: dict[str, str], **body: object):
    payload = {"source_text": SOURCE_TEXT, **body}
    return client.post(f"/api/v1/decks/{deck.id}/generate", json=payload, headers=headers)


def count_rows(db_session: Session, model: type) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


class TestGenerateFlashcards:
    """Tests for POST /api/v1/decks/{deck_id}/generate."""

    def test_generate_with_defaults_records_audit(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should return ten suggestions for exactly 1000 characters and store one audit record."""
        response = generate(client, test_deck, auth_headers, source_text="a" * 1000)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data["suggestions"]) == 10
        assert data["generation_duration_ms"] >= 0
        assert data["model"] == "openai/gpt-4o"

        generation = db_session.get(Generation, UUID(data["generation_id"]))
        assert generation is not None
        assert generation.generated_count == 10
        assert generation.source_text_length == 1000
        assert len(generation.source_text_hash) == 64
        assert count_rows(db_session, Flashcard) == 0

    def test_generate_respects_count_and_model(
        self,
        client: TestClient,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should honour an explicit count and allowed model."""
        response = generate(
            client, test_deck, auth_headers, count=5, model="anthropic/claude-3.5-sonnet"
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data["suggestions"]) == 5
        assert data["model"] == "anthropic/claude-3.5-sonnet"
        assert data["suggestions"][0]["front"] == "Question 1 about photosynthesis?"

    def test_generate_short_text_is_rejected(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should reject text under 1000 characters without touching the database."""
        response = generate(client, test_deck, auth_headers, source_text="a" * 999)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "source_text"
        assert count_rows(db_session, Generation) == 0
        assert count_rows(db_session, GenerationErrorLog) == 0

    def test_generate_unknown_model_is_rejected(
        self,
        client: TestClient,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should reject models outside the allow-list."""
        response = generate(client, test_deck, auth_headers, model="openai/gpt-2")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["details"]["field"] == "model"

    def test_generate_non_integer_count_is_rejected(
        self,
        client: TestClient,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should turn body validation errors into a 400 error envelope."""
        response = generate(client, test_deck, auth_headers, count="ten")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_generate_requires_user_header(self, client: TestClient, test_deck: Deck) -> None:
        """Should return 401 without a valid X-User-Id header."""
        missing = generate(client, test_deck, {})
        invalid = generate(client, test_deck, {"X-User-Id": "not-a-uuid"})

        assert missing.status_code == status.HTTP_401_UNAUTHORIZED
        assert missing.json()["error"]["code"] == "UNAUTHORIZED"
        assert invalid.status_code == status.HTTP_401_UNAUTHORIZED

    def test_generate_missing_deck(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        """Should return 404 for an unknown deck."""
        response = client.post(
            f"/api/v1/decks/{uuid4()}/generate",
            json={"source_text": SOURCE_TEXT},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "DECK_NOT_FOUND"

    def test_generate_foreign_deck_is_forbidden(
        self,
        client: TestClient,
        make_deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should return 403 for a deck owned by another user."""
        foreign_deck = make_deck(uuid4(), name="Not mine")

        response = generate(client, foreign_deck, auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_generate_rate_limited_after_ten(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        user_id: UUID,
        auth_headers: dict[str, str],
    ) -> None:
        """Should refuse the eleventh generation within an hour."""
        now = datetime.now(UTC)
        for i in range(10):
            db_session.add(
                Generation(
                    user_id=user_id,
                    model="openai/gpt-4o",
                    source_text_hash="0" * 64,
                    source_text_length=1000,
                    generated_count=10,
                    generation_duration=100,
                    created_at=now - timedelta(minutes=i),
                )
            )
        db_session.commit()

        response = generate(client, test_deck, auth_headers)

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert count_rows(db_session, Generation) == 10

    def test_generate_ignores_generations_older_than_an_hour(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        user_id: UUID,
        auth_headers: dict[str, str],
    ) -> None:
        """Should only count the trailing hour."""
        old = datetime.now(UTC) - timedelta(hours=2)
        for _ in range(10):
            db_session.add(
                Generation(
                    user_id=user_id,
                    model="openai/gpt-4o",
                    source_text_hash="0" * 64,
                    source_text_length=1000,
                    generated_count=10,
                    generation_duration=100,
                    created_at=old,
                )
            )
        db_session.commit()

        response = generate(client, test_deck, auth_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_generate_ai_failure_logs_error(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should return 422 with the machine code and write an error log instead of an audit record."""

        class FailingModelClient:
            async def send_message(self, *args: object, **kwargs: object):
                from tencards.application.common.result import Failure
                from tencards.infrastructure.ai.exceptions import ServiceError

                return Failure(ServiceError("PROVIDER_ERROR", "upstream exploded"))

        failing_service = AIGenerationService(model_client=FailingModelClient())  # type: ignore[arg-type]
        container.ai_flashcard_service.override(failing_service)
        try:
            response = generate(client, test_deck, auth_headers)
        finally:
            container.ai_flashcard_service.reset_override()

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        error = response.json()["error"]
        assert error["code"] == "AI_GENERATION_FAILED"
        assert error["details"] == {"error_code": "PROVIDER_ERROR"}
        assert "upstream exploded" not in response.text
        assert count_rows(db_session, Generation) == 0
        error_log = db_session.execute(select(GenerationErrorLog)).scalar_one()
        assert error_log.error_code == "PROVIDER_ERROR"

    def test_generate_unexpected_error_is_logged(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should answer 422 UNEXPECTED_ERROR and keep one error log when the adapter crashes."""

        class CrashingService:
            async def generate_flashcards(self, source_text: str, model: str, count: int):
                raise RuntimeError("adapter bug")

        container.ai_flashcard_service.override(CrashingService())
        try:
            response = generate(client, test_deck, auth_headers)
        finally:
            container.ai_flashcard_service.reset_override()

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"]["details"] == {"error_code": "UNEXPECTED_ERROR"}
        assert "adapter bug" not in response.text
        assert count_rows(db_session, Generation) == 0
        assert count_rows(db_session, GenerationErrorLog) == 1

    def test_generate_uses_configured_default_model(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(get_settings(), "AI_DEFAULT_MODEL", "openai/gpt-4o-mini")

        response = generate(client, test_deck, auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["model"] == "openai/gpt-4o-mini"
        audit = db_session.execute(select(Generation)).scalar_one()
        assert audit.model == "openai/gpt-4o-mini"


class TestAcceptFlashcards:
    """Tests for POST /api/v1/generations/{generation_id}/accept."""

    def _generation_id(
        self, client: TestClient, deck: Deck, headers: dict[str, str]
    ) -> str:
        response = generate(client, deck, headers, count=5)
        assert response.status_code == status.HTTP_200_OK
        return response.json()["generation_id"]

    def test_accept_sets_provenance(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should store edited and unedited suggestions with matching provenance."""
        generation_id = self._generation_id(client, test_deck, auth_headers)

        response = client.post(
            f"/api/v1/generations/{generation_id}/accept",
            params={"deck_id": str(test_deck.id)},
            json={
                "flashcards": [
                    {"front": "What is ATP?", "back": "Energy currency", "was_edited": False},
                    {"front": "Where?", "back": "In chloroplasts", "was_edited": True},
                ]
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["created_count"] == 2
        provenances = [card["provenance"] for card in data["flashcards"]]
        assert provenances == ["machine-generated", "machine-edited"]
        card = data["flashcards"][0]
        assert card["generation_id"] == generation_id
        assert card["interval"] == 0
        assert card["ease_factor"] == 2.5
        assert card["repetitions"] == 0
        assert count_rows(db_session, Flashcard) == 2

    def test_accept_infers_most_recent_deck(
        self,
        client: TestClient,
        test_deck: Deck,
        make_deck,
        user_id: UUID,
        auth_headers: dict[str, str],
    ) -> None:
        """Should fall back to the most recently updated deck without a deck_id."""
        generation_id = self._generation_id(client, test_deck, auth_headers)
        recent = make_deck(user_id, name="Recent", updated_at=datetime.now(UTC) + timedelta(hours=1))

        response = client.post(
            f"/api/v1/generations/{generation_id}/accept",
            json={"flashcards": [{"front": "Q", "back": "A", "was_edited": False}]},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["flashcards"][0]["deck_id"] == str(recent.id)

    def test_accept_empty_batch_is_rejected(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Should reject a batch with no flashcards."""
        generation_id = self._generation_id(client, test_deck, auth_headers)

        response = client.post(
            f"/api/v1/generations/{generation_id}/accept",
            params={"deck_id": str(test_deck.id)},
            json={"flashcards": []},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert count_rows(db_session, Flashcard) == 0

    def test_accept_unknown_generation(
        self, client: TestClient, test_deck: Deck, auth_headers: dict[str, str]
    ) -> None:
        """Should return 404 for an unknown generation."""
        response = client.post(
            f"/api/v1/generations/{uuid4()}/accept",
            params={"deck_id": str(test_deck.id)},
            json={"flashcards": [{"front": "Q", "back": "A", "was_edited": False}]},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "GENERATION_NOT_FOUND"

    def test_accept_foreign_generation_is_forbidden(
        self, client: TestClient, test_deck: Deck, auth_headers: dict[str, str]
    ) -> None:
        """Should not let another user accept someone else's generation."""
        generation_id = self._generation_id(client, test_deck, auth_headers)

        response = client.post(
            f"/api/v1/generations/{generation_id}/accept",
            json={"flashcards": [{"front": "Q", "back": "A", "was_edited": False}]},
            headers={"X-User-Id": str(uuid4())},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_accept_overlong_front_is_rejected(
        self, client: TestClient, test_deck: Deck, auth_headers: dict[str, str]
    ) -> None:
        """Should reject a front longer than 5000 characters."""
        generation_id = self._generation_id(client, test_deck, auth_headers)

        response = client.post(
            f"/api/v1/generations/{generation_id}/accept",
            params={"deck_id": str(test_deck.id)},
            json={"flashcards": [{"front": "x" * 5001, "back": "A", "was_edited": False}]},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestListGenerations:
    """Tests for GET /api/v1/generations."""

    def test_list_generations_newest_first(
        self, client: TestClient, test_deck: Deck, auth_headers: dict[str, str]
    ) -> None:
        """Should list only the caller's generations."""
        first = generate(client, test_deck, auth_headers, count=5).json()["generation_id"]
        second = generate(client, test_deck, auth_headers, count=6).json()["generation_id"]

        response = client.get("/api/v1/generations", headers=auth_headers)
        other = client.get("/api/v1/generations", headers={"X-User-Id": str(uuid4())})

        assert response.status_code == status.HTTP_200_OK
        ids = [g["id"] for g in response.json()["generations"]]
        assert set(ids) == {first, second}
        assert other.json()["generations"] == []

    def test_list_generations_limit_out_of_range(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        """Should reject a limit above 100."""
        response = client.get("/api/v1/generations", params={"limit": 101}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestAIDiagnostics:
    """Tests for GET /api/v1/ai/health and /api/v1/ai/usage."""

    def test_health_in_mock_mode(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Should report healthy without calling the provider."""
        response = client.get("/api/v1/ai/health", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["ok"] is True
        assert response.json()["message"] == "mock generation enabled"

    def test_usage_in_mock_mode(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Should return zeroed counters when no model client is configured."""
        response = client.get("/api/v1/ai/usage", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total_requests"] == 0
