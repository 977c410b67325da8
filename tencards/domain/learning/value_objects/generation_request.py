"""
GenerationRequest value object.

Validates everything about a generation call that can be checked without
touching the database or the model provider.
"""

from dataclasses import dataclass
from typing import Self

from tencards.domain.common.exceptions import ValidationError
from tencards.domain.common.value_object import ValueObject

MIN_SOURCE_TEXT_LENGTH = 1000
MAX_SOURCE_TEXT_LENGTH = 10000

MIN_COUNT = 5
MAX_COUNT = 20
DEFAULT_COUNT = 10

ALLOWED_MODELS: tuple[str, ...] = (
    "openai/gpt-4o",
    "openai/gpt-4o-mini",
    "anthropic/claude-3.5-sonnet",
    "google/gemini-pro-1.5",
)
DEFAULT_MODEL = "openai/gpt-4o"


@dataclass(frozen=True)
class GenerationRequest(ValueObject):
    """
    A validated request to generate flashcard suggestions.

    Attributes:
        source_text: Trimmed source text, 1000-10000 characters
        model: Model identifier from ALLOWED_MODELS
        count: Number of suggestions to generate, 5-20
    """

    source_text: str
    model: str
    count: int

    def __post_init__(self) -> None:
        length = len(self.source_text)
        if length < MIN_SOURCE_TEXT_LENGTH:
            raise ValidationError(
                f"Source text must be at least {MIN_SOURCE_TEXT_LENGTH} characters long",
                field="source_text",
                value=length,
            )
        if length > MAX_SOURCE_TEXT_LENGTH:
            raise ValidationError(
                f"Source text must not exceed {MAX_SOURCE_TEXT_LENGTH} characters",
                field="source_text",
                value=length,
            )
        if self.model not in ALLOWED_MODELS:
            raise ValidationError(
                f"Model must be one of: {', '.join(ALLOWED_MODELS)}",
                field="model",
                value=self.model,
            )
        # bool is an int subclass; reject it explicitly
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise ValidationError("Count must be an integer", field="count", value=self.count)
        if not MIN_COUNT <= self.count <= MAX_COUNT:
            raise ValidationError(
                f"Count must be between {MIN_COUNT} and {MAX_COUNT}",
                field="count",
                value=self.count,
            )

    @property
    def source_text_length(self) -> int:
        return len(self.source_text)

    @classmethod
    def create(
        cls,
        source_text: str,
        model: str | None = None,
        count: int | None = None,
        default_model: str = DEFAULT_MODEL,
    ) -> Self:
        """
        Build a request, trimming the text and applying defaults.

        ``default_model`` is used when no model is given and is held to the
        same allow-list as an explicit one.

        Raises:
            ValidationError: If any field is outside its allowed range
        """
        return cls(
            source_text=source_text.strip(),
            model=model if model is not None else default_model,
            count=count if count is not None else DEFAULT_COUNT,
        )
