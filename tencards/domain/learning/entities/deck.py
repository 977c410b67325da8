"""
Deck entity.

Decks are owned and managed outside the generation pipeline; this module
only models the fields the pipeline reads for ownership checks and deck
resolution.
"""

from dataclasses import dataclass
from datetime import datetime

from tencards.domain.common.entity import Entity
from tencards.domain.common.value_objects import DeckId, UserId


@dataclass
class Deck(Entity[DeckId]):
    """A user-owned collection of flashcards."""

    id: DeckId
    user_id: UserId
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id
