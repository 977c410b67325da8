"""Common value objects shared across all domain modules."""

from .content_hash import ContentHash
from .ids import (
    DeckId,
    FlashcardId,
    GenerationErrorLogId,
    GenerationId,
    UserId,
)

__all__ = [
    "ContentHash",
    "DeckId",
    "FlashcardId",
    "GenerationErrorLogId",
    "GenerationId",
    "UserId",
]
