"""
Flashcard entity for spaced repetition learning.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from tencards.domain.common.entity import Entity
from tencards.domain.common.exceptions import ValidationError
from tencards.domain.common.value_objects import DeckId, FlashcardId, GenerationId, UserId

MAX_FRONT_LENGTH = 5000
MAX_BACK_LENGTH = 10000

DEFAULT_INTERVAL_DAYS = 0
DEFAULT_EASE_FACTOR = 2.5
DEFAULT_REPETITIONS = 0


class Provenance(StrEnum):
    """Where the content of a flashcard came from."""

    MACHINE_GENERATED = "machine-generated"
    MACHINE_EDITED = "machine-edited"
    MANUAL = "manual"

    @classmethod
    def for_suggestion(cls, was_edited: bool) -> "Provenance":
        """Provenance of an accepted AI suggestion."""
        return cls.MACHINE_EDITED if was_edited else cls.MACHINE_GENERATED


def _validate_side(value: str, side: str, max_length: int) -> str:
    if not value or not value.strip():
        raise ValidationError(f"Flashcard {side} cannot be empty", field=side)
    if len(value) > max_length:
        raise ValidationError(
            f"Flashcard {side} must not exceed {max_length} characters", field=side
        )
    return value


@dataclass
class Flashcard(Entity[FlashcardId]):
    """
    Flashcard stored in a deck.

    Business Rules:
    - Front and back cannot be empty
    - Front is at most 5000 characters, back at most 10000
    - Flashcards accepted from a generation keep a link to it
    - Scheduling fields start at their defaults; the review scheduler owns them afterwards
    """

    id: FlashcardId
    deck_id: DeckId
    user_id: UserId
    front: str
    back: str
    provenance: Provenance
    next_review_at: datetime
    generation_id: GenerationId | None = None
    interval: int = DEFAULT_INTERVAL_DAYS
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = DEFAULT_REPETITIONS
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        _validate_side(self.front, "front", MAX_FRONT_LENGTH)
        _validate_side(self.back, "back", MAX_BACK_LENGTH)

    @classmethod
    def accept_suggestion(
        cls,
        deck_id: DeckId,
        user_id: UserId,
        generation_id: GenerationId,
        front: str,
        back: str,
        was_edited: bool,
        now: datetime,
    ) -> "Flashcard":
        """Create a flashcard from a reviewed AI suggestion."""
        return cls(
            id=FlashcardId.generate(),
            deck_id=deck_id,
            user_id=user_id,
            generation_id=generation_id,
            front=front,
            back=back,
            provenance=Provenance.for_suggestion(was_edited),
            next_review_at=now,
            created_at=now,
            updated_at=now,
        )
