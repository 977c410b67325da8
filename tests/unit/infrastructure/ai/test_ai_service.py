"""Tests for AIGenerationService."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tencards.application.common.result import Failure, Success
from tencards.application.learning.protocols.ai_flashcard_service import AIGenerationError
from tencards.infrastructure.ai.ai_service import AIGenerationService
from tencards.infrastructure.ai.exceptions import ServiceError


def model_client(result: Success | Failure) -> MagicMock:
    client = MagicMock()
    client.send_message = AsyncMock(return_value=result)
    return client


def cards(count: int) -> dict[str, list[dict[str, str]]]:
    return {"flashcards": [{"front": f" Q{i} ", "back": f"A{i}"} for i in range(count)]}


class TestLiveGeneration:
    @pytest.mark.asyncio
    async def test_sends_prompt_and_schema(self) -> None:
        """Should request exactly `count` cards in the source language with the strict schema."""
        client = model_client(Success(cards(5)))
        service = AIGenerationService(model_client=client)

        suggestions = await service.generate_flashcards("Source", "openai/gpt-4o", 5)

        assert [s.front for s in suggestions] == ["Q0", "Q1", "Q2", "Q3", "Q4"]
        args, kwargs = client.send_message.call_args
        assert args == ("Source text:\nSource",)
        assert "exactly 5 flashcards" in kwargs["system_message"]
        assert "SAME language" in kwargs["system_message"]
        assert kwargs["model"] == "openai/gpt-4o"
        assert kwargs["params"] == {"temperature": 0.7, "top_p": 1}
        json_schema = kwargs["response_format"]["json_schema"]
        assert json_schema["name"] == "flashcards"
        assert json_schema["strict"] is True
        assert json_schema["schema"]["additionalProperties"] is False

    @pytest.mark.asyncio
    async def test_failure_becomes_generation_error(self) -> None:
        client = model_client(Failure(ServiceError("SCHEMA_MISMATCH", "bad output", [])))
        service = AIGenerationService(model_client=client)

        with pytest.raises(AIGenerationError) as exc_info:
            await service.generate_flashcards("Source", "openai/gpt-4o", 5)

        assert exc_info.value.error_code == "SCHEMA_MISMATCH"

    @pytest.mark.asyncio
    async def test_extra_cards_are_truncated(self) -> None:
        service = AIGenerationService(model_client=model_client(Success(cards(8))))

        suggestions = await service.generate_flashcards("Source", "openai/gpt-4o", 5)

        assert len(suggestions) == 5

    @pytest.mark.asyncio
    async def test_too_few_cards_fail(self) -> None:
        service = AIGenerationService(model_client=model_client(Success(cards(3))))

        with pytest.raises(AIGenerationError) as exc_info:
            await service.generate_flashcards("Source", "openai/gpt-4o", 5)

        assert exc_info.value.error_code == "SUGGESTION_COUNT_MISMATCH"

    @pytest.mark.asyncio
    async def test_client_crash_becomes_unexpected_error(self) -> None:
        """Should wrap errors the client does not classify, e.g. httpx.InvalidURL."""
        client = MagicMock()
        client.send_message = AsyncMock(side_effect=httpx.InvalidURL("bad base url"))
        service = AIGenerationService(model_client=client)

        with pytest.raises(AIGenerationError) as exc_info:
            await service.generate_flashcards("Source", "openai/gpt-4o", 5)

        assert exc_info.value.error_code == "UNEXPECTED_ERROR"
        assert exc_info.value.message == "Unexpected error during flashcard generation"
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_malformed_cards_become_unexpected_error(self) -> None:
        service = AIGenerationService(model_client=model_client(Success({"flashcards": [{}]})))

        with pytest.raises(AIGenerationError) as exc_info:
            await service.generate_flashcards("Source", "openai/gpt-4o", 1)

        assert exc_info.value.error_code == "UNEXPECTED_ERROR"


class TestMockGeneration:
    @pytest.mark.asyncio
    async def test_deterministic_cards_from_topic(self) -> None:
        sleep = AsyncMock()
        service = AIGenerationService(use_mock=True, sleep=sleep, rng=lambda: 0.5)

        suggestions = await service.generate_flashcards(
            "The Mitochondria is an organelle found in cells", "openai/gpt-4o", 3
        )

        assert len(suggestions) == 3
        assert suggestions[0].front == "Question 1 about mitochondria?"
        assert suggestions[2].back.startswith("Answer 3: This is a generated answer")
        sleep.assert_awaited_once_with(1.25)

    @pytest.mark.asyncio
    async def test_topic_fallback(self) -> None:
        service = AIGenerationService(use_mock=True, sleep=AsyncMock())

        suggestions = await service.generate_flashcards("a b c de", "openai/gpt-4o", 1)

        assert suggestions[0].front == "Question 1 about the topic?"

    @pytest.mark.asyncio
    async def test_health_without_network(self) -> None:
        client = MagicMock()
        client.health_check = AsyncMock()
        service = AIGenerationService(model_client=client, use_mock=True)

        result = await service.health_check()

        assert result.ok is True
        assert result.message == "mock generation enabled"
        client.health_check.assert_not_awaited()

    def test_requires_client_unless_mocked(self) -> None:
        with pytest.raises(ValueError):
            AIGenerationService()
