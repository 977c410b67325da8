"""Learning context schemas."""

from tencards.infrastructure.learning.schemas.ai_schemas import AIHealthResponse, AIUsageResponse
from tencards.infrastructure.learning.schemas.flashcard_schemas import (
    AcceptedFlashcardItem,
    AcceptFlashcardsRequest,
    AcceptFlashcardsResponse,
    Flashcard,
)
from tencards.infrastructure.learning.schemas.generation_schemas import (
    FlashcardSuggestionItem,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    Generation,
    GenerationsListResponse,
)

__all__ = [
    "AIHealthResponse",
    "AIUsageResponse",
    "AcceptFlashcardsRequest",
    "AcceptFlashcardsResponse",
    "AcceptedFlashcardItem",
    "Flashcard",
    "FlashcardSuggestionItem",
    "GenerateFlashcardsRequest",
    "GenerateFlashcardsResponse",
    "Generation",
    "GenerationsListResponse",
]
