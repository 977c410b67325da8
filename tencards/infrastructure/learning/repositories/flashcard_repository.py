"""Repository for Flashcard domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from tencards.domain.common.value_objects import DeckId, GenerationId
from tencards.domain.learning.entities import Flashcard
from tencards.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from tencards.models import Flashcard as FlashcardORM


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_deck_id_for_generation(self, generation_id: GenerationId) -> DeckId | None:
        """
        Find the deck that earlier accepted cards of a generation went to.

        Args:
            generation_id: The generation ID

        Returns:
            DeckId of the oldest linked flashcard, None if there is none
        """
        stmt = (
            select(FlashcardORM.deck_id)
            .where(FlashcardORM.generation_id == generation_id.value)
            .order_by(FlashcardORM.created_at.asc())
            .limit(1)
        )
        deck_id = self.db.execute(stmt).scalar_one_or_none()
        return DeckId(deck_id) if deck_id else None

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert flashcards in a single transaction.

        Args:
            flashcards: New flashcard entities

        Returns:
            Saved flashcard entities in input order

        Raises:
            Any database error after rolling back the whole batch
        """
        orm_models = [self.mapper.to_orm(flashcard) for flashcard in flashcards]
        self.db.add_all(orm_models)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for orm_model in orm_models:
            self.db.refresh(orm_model)
        return [self.mapper.to_domain(orm) for orm in orm_models]
