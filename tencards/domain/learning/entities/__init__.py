from .deck import Deck
from .flashcard import Flashcard, Provenance
from .generation import Generation
from .generation_error_log import GenerationErrorLog

__all__ = [
    "Deck",
    "Flashcard",
    "Generation",
    "GenerationErrorLog",
    "Provenance",
]
