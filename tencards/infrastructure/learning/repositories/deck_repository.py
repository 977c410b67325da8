"""Repository for Deck lookups."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from tencards.domain.common.value_objects import DeckId, UserId
from tencards.domain.learning.entities import Deck
from tencards.infrastructure.learning.mappers.deck_mapper import DeckMapper
from tencards.models import Deck as DeckORM


class DeckRepository:
    """Read-only repository for Deck domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DeckMapper()

    def find_by_id(self, deck_id: DeckId) -> Deck | None:
        """
        Find a deck by ID without an ownership filter.

        Args:
            deck_id: The deck ID

        Returns:
            Deck entity if found, None otherwise
        """
        orm_model = self.db.get(DeckORM, deck_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_most_recently_updated(self, user_id: UserId) -> Deck | None:
        """
        Find the user's most recently updated deck.

        Args:
            user_id: The user ID

        Returns:
            Deck entity with the latest updated_at, None if the user has no decks
        """
        stmt = (
            select(DeckORM)
            .where(DeckORM.user_id == user_id.value)
            .order_by(DeckORM.updated_at.desc())
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None
