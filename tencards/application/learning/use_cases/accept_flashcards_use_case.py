"""Use case for accepting reviewed AI suggestions as flashcards."""

from collections.abc import Callable, Sequence
from datetime import datetime
from uuid import UUID

import structlog

from tencards.application.learning.protocols.deck_repository import DeckRepositoryProtocol
from tencards.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from tencards.application.learning.protocols.generation_repository import (
    GenerationRepositoryProtocol,
)
from tencards.application.learning.services.generation_rate_limiter import utcnow
from tencards.application.learning.use_cases.dtos import AcceptanceResult, AcceptedFlashcardInput
from tencards.application.learning.use_cases.exceptions import (
    MAX_ACCEPT_BATCH,
    MIN_ACCEPT_BATCH,
    AcceptBatchSizeError,
)
from tencards.domain.common.exceptions import ValidationError as DomainValidationError
from tencards.domain.common.value_objects import DeckId, GenerationId, UserId
from tencards.domain.learning.entities import Deck, Flashcard
from tencards.exceptions import (
    DeckNotFoundError,
    ForbiddenError,
    GenerationNotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class AcceptFlashcardsUseCase:
    """Use case that turns reviewed suggestions into permanent flashcards."""

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        deck_repository: DeckRepositoryProtocol,
        flashcard_repository: FlashcardRepositoryProtocol,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.generation_repository = generation_repository
        self.deck_repository = deck_repository
        self.flashcard_repository = flashcard_repository
        self.clock = clock

    def accept(
        self,
        user_id: UUID,
        generation_id: UUID,
        items: Sequence[AcceptedFlashcardInput],
        deck_id: UUID | None = None,
    ) -> AcceptanceResult:
        """
        Store the accepted suggestions of a generation.

        Args:
            user_id: ID of the requesting user
            generation_id: ID of the generation the suggestions came from
            items: Reviewed suggestions, 1-50 per call
            deck_id: Target deck; inferred from the generation when omitted

        Returns:
            Number of created flashcards and the flashcards themselves

        Raises:
            ValidationError: If the batch size is invalid, a card is invalid,
                or no target deck can be resolved
            GenerationNotFoundError: If the generation does not exist
            DeckNotFoundError: If the resolved deck does not exist
            ForbiddenError: If the generation or deck belongs to another user
        """
        if not MIN_ACCEPT_BATCH <= len(items) <= MAX_ACCEPT_BATCH:
            raise AcceptBatchSizeError(len(items))

        user_id_vo = UserId(user_id)
        generation_id_vo = GenerationId(generation_id)

        generation = self.generation_repository.find_by_id(generation_id_vo)
        if not generation:
            raise GenerationNotFoundError(generation_id)
        if not generation.is_owned_by(user_id_vo):
            raise ForbiddenError("You do not have access to this generation")

        deck = self._resolve_deck(user_id_vo, generation_id_vo, deck_id)

        now = self.clock()
        try:
            flashcards = [
                Flashcard.accept_suggestion(
                    deck_id=deck.id,
                    user_id=user_id_vo,
                    generation_id=generation_id_vo,
                    front=item.front,
                    back=item.back,
                    was_edited=item.was_edited,
                    now=now,
                )
                for item in items
            ]
        except DomainValidationError as e:
            raise ValidationError(e.message, details=e.details) from e

        created = self.flashcard_repository.save_all(flashcards)

        logger.info(
            "flashcards_accepted",
            generation_id=str(generation_id),
            deck_id=str(deck.id),
            user_id=str(user_id),
            created_count=len(created),
            edited_count=sum(1 for item in items if item.was_edited),
        )
        return AcceptanceResult(created_count=len(created), flashcards=created)

    def _resolve_deck(
        self, user_id: UserId, generation_id: GenerationId, deck_id: UUID | None
    ) -> Deck:
        """Explicit deck first, then a deck already used for this generation, then the latest deck."""
        if deck_id is not None:
            resolved_id: DeckId | None = DeckId(deck_id)
        else:
            resolved_id = self.flashcard_repository.find_deck_id_for_generation(generation_id)

        if resolved_id is None:
            recent = self.deck_repository.find_most_recently_updated(user_id)
            if recent is None:
                raise ValidationError(
                    "deck_id query parameter is required", details={"field": "deck_id"}
                )
            return recent

        deck = self.deck_repository.find_by_id(resolved_id)
        if not deck:
            raise DeckNotFoundError(resolved_id)
        if not deck.is_owned_by(user_id):
            raise ForbiddenError("You do not have access to this deck")
        return deck
