"""Mapper for Deck ORM → Domain conversion."""

from tencards.domain.common.value_objects import DeckId, UserId
from tencards.domain.learning.entities import Deck
from tencards.models import Deck as DeckORM


class DeckMapper:
    """Read-only mapper; decks are written by the deck CRUD service."""

    def to_domain(self, orm_model: DeckORM) -> Deck:
        return Deck(
            id=DeckId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            name=orm_model.name,
            description=orm_model.description,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )
