from dataclasses import dataclass
from typing import Protocol

UNEXPECTED_ERROR_CODE = "UNEXPECTED_ERROR"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error during flashcard generation"


@dataclass(frozen=True)
class FlashcardSuggestion:
    front: str
    back: str


class AIGenerationError(Exception):
    """Generation failed; error_code is the machine-readable reason."""

    def __init__(self, message: str, error_code: str, details: object = None) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(message)


class AIFlashcardServiceProtocol(Protocol):
    async def generate_flashcards(
        self, source_text: str, model: str, count: int
    ) -> list[FlashcardSuggestion]: ...
