"""Flashcard generation adapter over the model client, with an offline mode."""

import asyncio
import random
from collections.abc import Awaitable, Callable

import structlog

from tencards.application.learning.protocols.ai_flashcard_service import (
    UNEXPECTED_ERROR_CODE,
    UNEXPECTED_ERROR_MESSAGE,
    AIGenerationError,
    FlashcardSuggestion,
)
from tencards.infrastructure.ai.model_client import (
    HealthCheckResult,
    ResilientModelClient,
    UsageMetrics,
    json_schema_response_format,
)
from tencards.infrastructure.ai.prompts import (
    FLASHCARDS_SCHEMA,
    FLASHCARDS_SCHEMA_NAME,
    flashcards_instructions,
    source_text_message,
)

logger = structlog.get_logger(__name__)

GENERATION_PARAMS = {"temperature": 0.7, "top_p": 1}
MOCK_TOPIC_PREVIEW_LENGTH = 50


class AIGenerationService:
    """
    Generates flashcard suggestions through the model client.

    With ``use_mock`` enabled no request leaves the process: suggestions are
    built from the first meaningful word of the text after a simulated delay.
    """

    def __init__(
        self,
        model_client: ResilientModelClient | None = None,
        use_mock: bool = False,
        mock_min_latency_ms: int = 500,
        mock_max_latency_ms: int = 2000,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        if model_client is None and not use_mock:
            raise ValueError("A model client is required unless mock generation is enabled")
        self.model_client = model_client
        self.use_mock = use_mock
        self.mock_min_latency_ms = mock_min_latency_ms
        self.mock_max_latency_ms = mock_max_latency_ms
        self._sleep = sleep
        self._rng = rng

    async def generate_flashcards(
        self, source_text: str, model: str, count: int
    ) -> list[FlashcardSuggestion]:
        try:
            if self.use_mock or self.model_client is None:
                return await self._generate_mock_flashcards(source_text, count)
            return await self._generate_with_model(self.model_client, source_text, model, count)
        except AIGenerationError:
            raise
        except Exception as e:
            logger.error(
                "flashcard_generation_unexpected_error", model=model, error=str(e), exc_info=True
            )
            raise AIGenerationError(UNEXPECTED_ERROR_MESSAGE, UNEXPECTED_ERROR_CODE) from e

    async def health_check(self) -> HealthCheckResult:
        if self.use_mock or self.model_client is None:
            return HealthCheckResult(ok=True, latency_ms=0.0, message="mock generation enabled")
        return await self.model_client.health_check()

    def usage(self) -> UsageMetrics:
        if self.model_client is None:
            return UsageMetrics()
        return self.model_client.usage

    async def _generate_with_model(
        self, model_client: ResilientModelClient, source_text: str, model: str, count: int
    ) -> list[FlashcardSuggestion]:
        result = await model_client.send_message(
            source_text_message(source_text),
            system_message=flashcards_instructions(count),
            model=model,
            params=GENERATION_PARAMS,
            response_format=json_schema_response_format(FLASHCARDS_SCHEMA_NAME, FLASHCARDS_SCHEMA),
        )
        if result.is_failure:
            error = result.unwrap_error()
            raise AIGenerationError(error.message, error.code, error.details)

        suggestions = [
            FlashcardSuggestion(front=item["front"].strip(), back=item["back"].strip())
            for item in result.unwrap()["flashcards"]
            if item["front"].strip() and item["back"].strip()
        ]
        if len(suggestions) < count:
            logger.warning(
                "model_returned_too_few_flashcards",
                model=model,
                requested=count,
                received=len(suggestions),
            )
            raise AIGenerationError(
                f"Model returned {len(suggestions)} usable flashcards, expected {count}",
                "SUGGESTION_COUNT_MISMATCH",
                {"requested": count, "received": len(suggestions)},
            )
        return suggestions[:count]

    async def _generate_mock_flashcards(
        self, source_text: str, count: int
    ) -> list[FlashcardSuggestion]:
        low, high = self.mock_min_latency_ms, self.mock_max_latency_ms
        delay_ms = low + self._rng() * (high - low)
        if delay_ms > 0:
            await self._sleep(delay_ms / 1000)

        topic = _extract_topic(source_text[:MOCK_TOPIC_PREVIEW_LENGTH])
        return [
            FlashcardSuggestion(
                front=f"Question {i + 1} about {topic}?",
                back=(
                    f"Answer {i + 1}: This is a generated answer based on the provided text "
                    f"about {topic}. It demonstrates the flashcard format with a clear, "
                    "concise response."
                ),
            )
            for i in range(count)
        ]


def _extract_topic(preview: str) -> str:
    """First word longer than three characters, lowercased."""
    words = [word for word in preview.split() if len(word) > 3]
    return words[0].lower() if words else "the topic"
