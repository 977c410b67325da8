"""Custom exception hierarchy for the tencards application."""

from starlette import status


class TenCardsError(Exception):
    """Base exception for all tencards errors."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize exception with message, status code and machine-readable code."""
        self.message = message
        self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(self.message)


class ValidationError(TenCardsError):
    """Validation error."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details=details)


class UnauthorizedError(TenCardsError):
    """Caller identity is missing or invalid."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid or missing user identity") -> None:
        """Initialize with message and 401 status code."""
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(TenCardsError):
    """Resource exists but belongs to another user."""

    code = "FORBIDDEN"

    def __init__(self, message: str = "You do not have access to this resource") -> None:
        """Initialize with message and 403 status code."""
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(TenCardsError):
    """Resource not found error."""

    code = "NOT_FOUND"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class DeckNotFoundError(NotFoundError):
    """Deck not found error."""

    code = "DECK_NOT_FOUND"

    def __init__(self, deck_id: object | None = None) -> None:
        """Initialize with deck ID."""
        self.deck_id = deck_id
        if deck_id is not None:
            super().__init__(f"Deck with id {deck_id} not found")
        else:
            super().__init__("Deck not found")


class GenerationNotFoundError(NotFoundError):
    """Generation audit record not found error."""

    code = "GENERATION_NOT_FOUND"

    def __init__(self, generation_id: object | None = None) -> None:
        """Initialize with generation ID."""
        self.generation_id = generation_id
        if generation_id is not None:
            super().__init__(f"Generation with id {generation_id} not found")
        else:
            super().__init__("Generation not found")


class RateLimitExceededError(TenCardsError):
    """User exceeded the hourly generation allowance."""

    code = "RATE_LIMIT_EXCEEDED"

    def __init__(
        self, message: str = "Generation rate limit exceeded. Please try again later."
    ) -> None:
        """Initialize with message and 429 status code."""
        super().__init__(message, status.HTTP_429_TOO_MANY_REQUESTS)


class AIGenerationFailedError(TenCardsError):
    """The model provider could not produce usable suggestions."""

    code = "AI_GENERATION_FAILED"

    def __init__(self, error_code: str) -> None:
        """Initialize with the machine-readable failure code of the attempt."""
        self.error_code = error_code
        super().__init__(
            "Failed to generate flashcards from the provided text",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"error_code": error_code},
        )
