"""Exceptions for learning use cases."""

from tencards.exceptions import ValidationError

MIN_ACCEPT_BATCH = 1
MAX_ACCEPT_BATCH = 50


class AcceptBatchSizeError(ValidationError):
    """Accept request with no flashcards or too many."""

    def __init__(self, size: int) -> None:
        self.size = size
        if size < MIN_ACCEPT_BATCH:
            message = "At least one flashcard must be provided"
        else:
            message = f"Maximum {MAX_ACCEPT_BATCH} flashcards can be accepted at once"
        super().__init__(message, details={"field": "flashcards", "size": size})
