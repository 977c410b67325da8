"""DTOs for the generate and accept use cases."""

from dataclasses import dataclass

from tencards.application.learning.protocols.ai_flashcard_service import FlashcardSuggestion
from tencards.domain.common.value_objects import GenerationId
from tencards.domain.learning.entities import Flashcard


@dataclass(frozen=True)
class GenerationResult:
    """Suggestions returned to the caller for review. Nothing here is persisted."""

    generation_id: GenerationId
    suggestions: list[FlashcardSuggestion]
    model: str
    duration_ms: int


@dataclass(frozen=True)
class AcceptedFlashcardInput:
    """A reviewed suggestion, flagged if the user changed it."""

    front: str
    back: str
    was_edited: bool


@dataclass(frozen=True)
class AcceptanceResult:
    created_count: int
    flashcards: list[Flashcard]
