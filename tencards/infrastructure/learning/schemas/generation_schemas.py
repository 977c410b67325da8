"""Pydantic schemas for the generation API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt


class GenerateFlashcardsRequest(BaseModel):
    """Schema for requesting AI flashcard suggestions.

    Length, allow-list and range checks run in the use case so they report
    the same field-level errors regardless of the transport.
    """

    source_text: str = Field(..., description="Text to generate flashcards from")
    model: str | None = Field(None, description="Model identifier; server default when omitted")
    count: StrictInt | None = Field(None, description="Number of suggestions (5-20)")


class FlashcardSuggestionItem(BaseModel):
    """A single suggested flashcard, not yet stored."""

    front: str = Field(..., description="Question side")
    back: str = Field(..., description="Answer side")


class GenerateFlashcardsResponse(BaseModel):
    """Schema for AI flashcard suggestions."""

    generation_id: UUID = Field(..., description="ID to pass when accepting suggestions")
    suggestions: list[FlashcardSuggestionItem] = Field(..., description="Suggested flashcards")
    model: str = Field(..., description="Model that produced the suggestions")
    generation_duration_ms: int = Field(..., ge=0, description="Time spent generating")


class Generation(BaseModel):
    """Schema for a generation audit record."""

    id: UUID
    model: str
    source_text_hash: str = Field(..., description="SHA-256 of the trimmed source text")
    source_text_length: int
    generated_count: int
    generation_duration_ms: int
    created_at: datetime


class GenerationsListResponse(BaseModel):
    """Schema for the generation history of a user."""

    generations: list[Generation] = Field(..., description="Generations, newest first")
