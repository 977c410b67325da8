"""API routes for generation history and accepting suggestions."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, status

from tencards.application.learning.use_cases.accept_flashcards_use_case import (
    AcceptFlashcardsUseCase,
)
from tencards.application.learning.use_cases.dtos import AcceptedFlashcardInput
from tencards.application.learning.use_cases.list_generations_use_case import (
    ListGenerationsUseCase,
)
from tencards.core import container
from tencards.domain.common.exceptions import DomainError
from tencards.domain.learning.entities import Flashcard as FlashcardEntity
from tencards.exceptions import TenCardsError
from tencards.infrastructure.common.di import inject_use_case
from tencards.infrastructure.identity.dependencies import get_current_user_id
from tencards.infrastructure.learning.schemas import (
    AcceptFlashcardsRequest,
    AcceptFlashcardsResponse,
    Flashcard,
    Generation,
    GenerationsListResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])


def _to_flashcard_schema(entity: FlashcardEntity) -> Flashcard:
    return Flashcard(
        id=entity.id.value,
        deck_id=entity.deck_id.value,
        generation_id=entity.generation_id.value if entity.generation_id else None,
        front=entity.front,
        back=entity.back,
        provenance=entity.provenance.value,
        next_review_at=entity.next_review_at,
        interval=entity.interval,
        ease_factor=entity.ease_factor,
        repetitions=entity.repetitions,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


@router.post(
    "/{generation_id}/accept",
    response_model=AcceptFlashcardsResponse,
    status_code=status.HTTP_201_CREATED,
)
def accept_flashcards(
    generation_id: UUID,
    request: AcceptFlashcardsRequest,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    deck_id: Annotated[UUID | None, Query(description="Target deck")] = None,
    use_case: AcceptFlashcardsUseCase = Depends(
        inject_use_case(container.accept_flashcards_use_case)
    ),
) -> AcceptFlashcardsResponse:
    """
    Store reviewed suggestions of a generation as flashcards.

    When ``deck_id`` is omitted the deck is inferred from flashcards already
    accepted for this generation, then from the most recently updated deck.

    Args:
        generation_id: ID returned by the generate endpoint
        request: Accepted flashcards (1-50), each flagged if edited
        deck_id: Optional target deck
        use_case: AcceptFlashcardsUseCase injected via dependency container

    Returns:
        Number of created flashcards and the flashcards
    """
    try:
        result = use_case.accept(
            user_id=user_id,
            generation_id=generation_id,
            items=[
                AcceptedFlashcardInput(front=item.front, back=item.back, was_edited=item.was_edited)
                for item in request.flashcards
            ],
            deck_id=deck_id,
        )
        return AcceptFlashcardsResponse(
            created_count=result.created_count,
            flashcards=[_to_flashcard_schema(f) for f in result.flashcards],
        )
    except (TenCardsError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_accept_flashcards",
            generation_id=str(generation_id),
            user_id=str(user_id),
            error=str(e),
            exc_info=True,
        )
        raise TenCardsError("An unexpected error occurred. Please try again later.") from e


@router.get("", response_model=GenerationsListResponse, status_code=status.HTTP_200_OK)
def list_generations(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum number of records")] = 20,
    use_case: ListGenerationsUseCase = Depends(
        inject_use_case(container.list_generations_use_case)
    ),
) -> GenerationsListResponse:
    """List the caller's generations, newest first."""
    generations = use_case.list_generations(user_id=user_id, limit=limit)
    return GenerationsListResponse(
        generations=[
            Generation(
                id=g.id.value,
                model=g.model,
                source_text_hash=g.source_text_hash.value,
                source_text_length=g.source_text_length,
                generated_count=g.generated_count,
                generation_duration_ms=g.generation_duration_ms,
                created_at=g.created_at,
            )
            for g in generations
        ]
    )
