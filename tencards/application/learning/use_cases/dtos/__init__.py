"""DTOs for learning use cases."""

from .generation_dtos import AcceptanceResult, AcceptedFlashcardInput, GenerationResult

__all__ = [
    "AcceptanceResult",
    "AcceptedFlashcardInput",
    "GenerationResult",
]
