"""Use case for listing a user's generation history."""

from uuid import UUID

from tencards.application.learning.protocols.generation_repository import (
    GenerationRepositoryProtocol,
)
from tencards.domain.common.value_objects import UserId
from tencards.domain.learning.entities import Generation
from tencards.exceptions import ValidationError

MAX_HISTORY_LIMIT = 100


class ListGenerationsUseCase:
    """Read-only access to the generation audit log of the caller."""

    def __init__(self, generation_repository: GenerationRepositoryProtocol) -> None:
        self.generation_repository = generation_repository

    def list_generations(self, user_id: UUID, limit: int = 20) -> list[Generation]:
        """Return the newest generations first."""
        if not 1 <= limit <= MAX_HISTORY_LIMIT:
            raise ValidationError(
                f"Limit must be between 1 and {MAX_HISTORY_LIMIT}",
                details={"field": "limit", "value": limit},
            )
        return self.generation_repository.find_recent_by_user(UserId(user_id), limit)
