"""Pydantic schemas for accepting suggestions as flashcards."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, StrictBool

from tencards.domain.learning.entities.flashcard import MAX_BACK_LENGTH, MAX_FRONT_LENGTH


class AcceptedFlashcardItem(BaseModel):
    """A reviewed suggestion."""

    front: str = Field(..., min_length=1, max_length=MAX_FRONT_LENGTH)
    back: str = Field(..., min_length=1, max_length=MAX_BACK_LENGTH)
    was_edited: StrictBool = Field(..., description="Whether the user changed the suggestion")


class AcceptFlashcardsRequest(BaseModel):
    """Schema for accepting suggestions of a generation (1-50 per request)."""

    flashcards: list[AcceptedFlashcardItem] = Field(
        ..., description="Flashcards to store in the deck"
    )


class Flashcard(BaseModel):
    """Schema for a stored flashcard."""

    id: UUID
    deck_id: UUID
    generation_id: UUID | None = None
    front: str
    back: str
    provenance: str = Field(..., description="machine-generated, machine-edited or manual")
    next_review_at: datetime
    interval: int
    ease_factor: float
    repetitions: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AcceptFlashcardsResponse(BaseModel):
    """Schema for the accept response."""

    created_count: int = Field(..., ge=0)
    flashcards: list[Flashcard]
