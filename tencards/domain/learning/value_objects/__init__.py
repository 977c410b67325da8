from .generation_request import (
    ALLOWED_MODELS,
    DEFAULT_COUNT,
    DEFAULT_MODEL,
    MAX_COUNT,
    MAX_SOURCE_TEXT_LENGTH,
    MIN_COUNT,
    MIN_SOURCE_TEXT_LENGTH,
    GenerationRequest,
)

__all__ = [
    "ALLOWED_MODELS",
    "DEFAULT_COUNT",
    "DEFAULT_MODEL",
    "MAX_COUNT",
    "MAX_SOURCE_TEXT_LENGTH",
    "MIN_COUNT",
    "MIN_SOURCE_TEXT_LENGTH",
    "GenerationRequest",
]
