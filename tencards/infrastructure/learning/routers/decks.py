"""API routes for generating flashcard suggestions in a deck."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, status

from tencards.application.learning.use_cases.generate_flashcards_use_case import (
    GenerateFlashcardsUseCase,
)
from tencards.core import container
from tencards.domain.common.exceptions import DomainError
from tencards.exceptions import TenCardsError
from tencards.infrastructure.common.di import inject_use_case
from tencards.infrastructure.identity.dependencies import get_current_user_id
from tencards.infrastructure.learning.schemas import (
    FlashcardSuggestionItem,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/decks", tags=["generations"])


@router.post(
    "/{deck_id}/generate",
    response_model=GenerateFlashcardsResponse,
    status_code=status.HTTP_200_OK,
)
async def generate_flashcards(
    deck_id: UUID,
    request: GenerateFlashcardsRequest,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    use_case: GenerateFlashcardsUseCase = Depends(
        inject_use_case(container.generate_flashcards_use_case)
    ),
) -> GenerateFlashcardsResponse:
    """
    Generate flashcard suggestions from source text.

    Suggestions are not stored. Accept the ones to keep with
    ``POST /generations/{generation_id}/accept``.

    Args:
        deck_id: ID of the deck the suggestions are meant for
        request: Source text, optional model and count
        use_case: GenerateFlashcardsUseCase injected via dependency container

    Returns:
        Generation ID, suggestions, model and generation time

    Raises:
        TenCardsError: On validation, ownership, rate limit or generation failure
    """
    try:
        result = await use_case.generate(
            user_id=user_id,
            deck_id=deck_id,
            source_text=request.source_text,
            model=request.model,
            count=request.count,
        )
        return GenerateFlashcardsResponse(
            generation_id=result.generation_id.value,
            suggestions=[
                FlashcardSuggestionItem(front=s.front, back=s.back) for s in result.suggestions
            ],
            model=result.model,
            generation_duration_ms=result.duration_ms,
        )
    except (TenCardsError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_generate_flashcards",
            deck_id=str(deck_id),
            user_id=str(user_id),
            error=str(e),
            exc_info=True,
        )
        raise TenCardsError("An unexpected error occurred. Please try again later.") from e
