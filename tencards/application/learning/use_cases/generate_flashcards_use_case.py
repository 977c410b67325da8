"""Use case for generating flashcard suggestions with AI."""

import time
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from tencards.application.learning.protocols.ai_flashcard_service import (
    UNEXPECTED_ERROR_CODE,
    UNEXPECTED_ERROR_MESSAGE,
    AIFlashcardServiceProtocol,
    AIGenerationError,
    FlashcardSuggestion,
)
from tencards.application.learning.protocols.deck_repository import DeckRepositoryProtocol
from tencards.application.learning.protocols.generation_repository import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from tencards.application.learning.services.generation_rate_limiter import (
    GenerationRateLimiter,
    utcnow,
)
from tencards.application.learning.use_cases.dtos import GenerationResult
from tencards.domain.common.exceptions import ValidationError as DomainValidationError
from tencards.domain.common.value_objects import ContentHash, DeckId, UserId
from tencards.domain.learning.entities import Generation, GenerationErrorLog
from tencards.domain.learning.value_objects import DEFAULT_MODEL, GenerationRequest
from tencards.exceptions import (
    AIGenerationFailedError,
    DeckNotFoundError,
    ForbiddenError,
    RateLimitExceededError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class GenerateFlashcardsUseCase:
    """Use case for turning source text into reviewable flashcard suggestions."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        generation_repository: GenerationRepositoryProtocol,
        error_log_repository: GenerationErrorLogRepositoryProtocol,
        rate_limiter: GenerationRateLimiter,
        ai_flashcard_service: AIFlashcardServiceProtocol,
        default_model: str = DEFAULT_MODEL,
        clock: Callable[[], datetime] = utcnow,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize use case with repository protocols and the AI service."""
        self.deck_repository = deck_repository
        self.generation_repository = generation_repository
        self.error_log_repository = error_log_repository
        self.rate_limiter = rate_limiter
        self.ai_flashcard_service = ai_flashcard_service
        self.default_model = default_model
        self.clock = clock
        self.timer = timer

    async def generate(
        self,
        user_id: UUID,
        deck_id: UUID,
        source_text: str,
        model: str | None = None,
        count: int | None = None,
    ) -> GenerationResult:
        """
        Generate flashcard suggestions for a deck.

        Suggestions are returned to the caller and not stored; only an audit
        record (or an error log on failure) is persisted.

        Args:
            user_id: ID of the requesting user
            deck_id: ID of the target deck
            source_text: Text to generate flashcards from (1000-10000 chars after trimming)
            model: Model identifier from the allow-list, the configured default when None
            count: Number of suggestions (5-20), default applied when None

        Returns:
            Generation ID, suggestions, model and duration

        Raises:
            ValidationError: If text length, model or count is invalid
            DeckNotFoundError: If the deck does not exist
            ForbiddenError: If the deck belongs to another user
            RateLimitExceededError: If the user exhausted the hourly allowance
            AIGenerationFailedError: If the model could not produce suggestions
        """
        try:
            request = GenerationRequest.create(
                source_text, model=model, count=count, default_model=self.default_model
            )
        except DomainValidationError as e:
            raise ValidationError(e.message, details=e.details) from e

        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(deck_id)

        deck = self.deck_repository.find_by_id(deck_id_vo)
        if not deck:
            raise DeckNotFoundError(deck_id)
        if not deck.is_owned_by(user_id_vo):
            raise ForbiddenError("You do not have access to this deck")

        if not self.rate_limiter.allow(user_id_vo):
            raise RateLimitExceededError

        source_text_hash = ContentHash.compute(request.source_text)

        started = self.timer()
        try:
            suggestions = await self._request_suggestions(request)
        except AIGenerationError as e:
            logger.error(
                "generation_failed",
                user_id=str(user_id),
                model=request.model,
                error_code=e.error_code,
                error=e.message,
                details=e.details,
            )
            self._record_failure(user_id_vo, request.model, e)
            raise AIGenerationFailedError(e.error_code) from e
        duration_ms = max(0, round((self.timer() - started) * 1000))

        generation = Generation.create(
            user_id=user_id_vo,
            model=request.model,
            source_text_hash=source_text_hash,
            source_text_length=request.source_text_length,
            generated_count=len(suggestions),
            generation_duration_ms=duration_ms,
            created_at=self.clock(),
        )
        try:
            generation = self.generation_repository.save(generation)
        except Exception as e:
            # The user still gets their suggestions; only the audit trail is lost
            logger.error(
                "generation_audit_persist_failed",
                generation_id=str(generation.id),
                user_id=str(user_id),
                error=str(e),
                exc_info=True,
            )

        logger.info(
            "flashcards_generated",
            generation_id=str(generation.id),
            user_id=str(user_id),
            deck_id=str(deck_id),
            model=request.model,
            suggestion_count=len(suggestions),
            source_text_length=request.source_text_length,
            duration_ms=duration_ms,
        )

        return GenerationResult(
            generation_id=generation.id,
            suggestions=suggestions,
            model=request.model,
            duration_ms=duration_ms,
        )

    async def _request_suggestions(self, request: GenerationRequest) -> list[FlashcardSuggestion]:
        try:
            return await self.ai_flashcard_service.generate_flashcards(
                request.source_text, request.model, request.count
            )
        except AIGenerationError:
            raise
        except Exception as e:
            logger.error(
                "generation_unexpected_error", model=request.model, error=str(e), exc_info=True
            )
            raise AIGenerationError(UNEXPECTED_ERROR_MESSAGE, UNEXPECTED_ERROR_CODE) from e

    def _record_failure(self, user_id: UserId, model: str, error: AIGenerationError) -> None:
        """Best-effort write of the error log; never masks the generation failure."""
        error_log = GenerationErrorLog.create(
            user_id=user_id,
            model=model,
            error_code=error.error_code,
            error_message=error.message,
            created_at=self.clock(),
        )
        try:
            self.error_log_repository.save(error_log)
        except Exception as e:
            logger.error(
                "generation_error_log_persist_failed",
                user_id=str(user_id),
                error_code=error.error_code,
                error=str(e),
                exc_info=True,
            )
