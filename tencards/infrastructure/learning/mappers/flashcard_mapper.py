"""Mapper for Flashcard ORM ↔ Domain conversion."""

from tencards.domain.common.value_objects import DeckId, FlashcardId, GenerationId, UserId
from tencards.domain.learning.entities import Flashcard, Provenance
from tencards.models import Flashcard as FlashcardORM


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard(
            id=FlashcardId(orm_model.id),
            deck_id=DeckId(orm_model.deck_id),
            user_id=UserId(orm_model.user_id),
            front=orm_model.front,
            back=orm_model.back,
            provenance=Provenance(orm_model.provenance),
            next_review_at=orm_model.next_review_at,
            generation_id=GenerationId(orm_model.generation_id) if orm_model.generation_id else None,
            interval=orm_model.interval,
            ease_factor=orm_model.ease_factor,
            repetitions=orm_model.repetitions,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: Flashcard) -> FlashcardORM:
        """Convert domain entity to a new ORM model."""
        return FlashcardORM(
            id=domain_entity.id.value,
            deck_id=domain_entity.deck_id.value,
            user_id=domain_entity.user_id.value,
            generation_id=(
                domain_entity.generation_id.value if domain_entity.generation_id else None
            ),
            front=domain_entity.front,
            back=domain_entity.back,
            provenance=domain_entity.provenance.value,
            next_review_at=domain_entity.next_review_at,
            interval=domain_entity.interval,
            ease_factor=domain_entity.ease_factor,
            repetitions=domain_entity.repetitions,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
