"""Protocol for Flashcard repository in learning context."""

from typing import Protocol

from tencards.domain.common.value_objects import DeckId, GenerationId
from tencards.domain.learning.entities import Flashcard


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def find_deck_id_for_generation(self, generation_id: GenerationId) -> DeckId | None:
        """
        Find the deck of any flashcard already accepted from a generation.

        Args:
            generation_id: The generation ID

        Returns:
            DeckId of a linked flashcard, None if none were accepted yet
        """
        ...

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert a batch of new flashcards atomically.

        Either every flashcard is stored or none is.

        Args:
            flashcards: Flashcard entities to insert

        Returns:
            Stored flashcard entities in input order
        """
        ...
