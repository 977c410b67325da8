"""Protocols for generation audit and error log persistence."""

from datetime import datetime
from typing import Protocol

from tencards.domain.common.value_objects import GenerationId, UserId
from tencards.domain.learning.entities import Generation, GenerationErrorLog


class GenerationRepositoryProtocol(Protocol):
    """Protocol for Generation audit record operations."""

    def find_by_id(self, generation_id: GenerationId) -> Generation | None:
        """
        Find a generation by ID regardless of owner.

        Args:
            generation_id: The generation ID

        Returns:
            Generation entity if found, None otherwise
        """
        ...

    def count_created_since(self, user_id: UserId, since: datetime) -> int:
        """
        Count the user's generations created at or after `since`.

        Args:
            user_id: The user ID
            since: Start of the window (inclusive)

        Returns:
            Number of audit records in the window
        """
        ...

    def find_recent_by_user(self, user_id: UserId, limit: int) -> list[Generation]:
        """Return the user's generations ordered by created_at DESC."""
        ...

    def save(self, generation: Generation) -> Generation:
        """Persist a new audit record."""
        ...


class GenerationErrorLogRepositoryProtocol(Protocol):
    """Protocol for failed generation logging."""

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        """Persist a new error log entry."""
        ...
