"""Error log entry written when an AI generation attempt fails."""

from dataclasses import dataclass
from datetime import datetime

from tencards.domain.common.entity import Entity
from tencards.domain.common.value_objects import GenerationErrorLogId, UserId

MAX_ERROR_CODE_LENGTH = 100


@dataclass(frozen=True)
class GenerationErrorLog(Entity[GenerationErrorLogId]):
    """Failed generation attempt, kept for debugging and provider monitoring."""

    id: GenerationErrorLogId
    user_id: UserId
    model: str
    error_code: str
    error_message: str
    created_at: datetime

    @classmethod
    def create(
        cls,
        user_id: UserId,
        model: str,
        error_code: str,
        error_message: str,
        created_at: datetime,
    ) -> "GenerationErrorLog":
        return cls(
            id=GenerationErrorLogId.generate(),
            user_id=user_id,
            model=model,
            error_code=(error_code or "UNKNOWN_ERROR")[:MAX_ERROR_CODE_LENGTH],
            error_message=error_message or "Unknown error",
            created_at=created_at,
        )
