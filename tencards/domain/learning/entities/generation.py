"""
Generation audit record.

One record is written per successful AI generation. It captures model usage
and latency for analytics, never the source text itself.
"""

from dataclasses import dataclass
from datetime import datetime

from tencards.domain.common.entity import Entity
from tencards.domain.common.exceptions import InvariantViolationError
from tencards.domain.common.value_objects import ContentHash, GenerationId, UserId


@dataclass(frozen=True)
class Generation(Entity[GenerationId]):
    """
    Audit record of a successful flashcard generation.

    Business Rules:
    - Created only after the model returned valid suggestions
    - Immutable once created
    - Stores a fingerprint and length of the source text, not the text
    """

    id: GenerationId
    user_id: UserId
    model: str
    source_text_hash: ContentHash
    source_text_length: int
    generated_count: int
    generation_duration_ms: int
    created_at: datetime

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.source_text_length <= 0:
            raise InvariantViolationError("Generation", "source_text_length must be positive")
        if self.generated_count < 0:
            raise InvariantViolationError("Generation", "generated_count cannot be negative")
        if self.generation_duration_ms < 0:
            raise InvariantViolationError("Generation", "duration cannot be negative")

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    @classmethod
    def create(
        cls,
        user_id: UserId,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
        generated_count: int,
        generation_duration_ms: int,
        created_at: datetime,
    ) -> "Generation":
        """Create a new audit record with a fresh identifier."""
        return cls(
            id=GenerationId.generate(),
            user_id=user_id,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
            generated_count=generated_count,
            generation_duration_ms=generation_duration_ms,
            created_at=created_at,
        )
