"""Per-user hourly limit on AI generations."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from tencards.application.learning.protocols.generation_repository import (
    GenerationRepositoryProtocol,
)
from tencards.domain.common.value_objects import UserId

logger = structlog.get_logger(__name__)

DEFAULT_LIMIT_PER_HOUR = 10
RATE_LIMIT_WINDOW = timedelta(hours=1)


def utcnow() -> datetime:
    return datetime.now(UTC)


class GenerationRateLimiter:
    """
    Count-based rate limiter over the generation audit log.

    Only successful generations count; failed attempts land in the error log
    and do not consume the allowance. The limiter never writes: the audit
    record saved after a successful generation is what the next check sees.

    Concurrent requests from one user can race between the count and the
    insert, so the limit may be exceeded by one or two requests under load.

    If the count query fails the request is permitted (fail-open): an outage
    of the audit store should not block generation. This also means a store
    outage removes the limit entirely, which matters for cost-sensitive
    deployments.
    """

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        limit_per_hour: int = DEFAULT_LIMIT_PER_HOUR,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if limit_per_hour < 0:
            raise ValueError("limit_per_hour cannot be negative")
        self.generation_repository = generation_repository
        self.limit_per_hour = limit_per_hour
        self.clock = clock

    def allow(self, user_id: UserId) -> bool:
        """
        Check whether the user may start another generation.

        Args:
            user_id: The user to check

        Returns:
            True when the user's generations in the trailing hour are below the limit
        """
        since = self.clock() - RATE_LIMIT_WINDOW
        try:
            count = self.generation_repository.count_created_since(user_id, since)
        except Exception as e:
            logger.warning(
                "rate_limit_check_failed",
                user_id=str(user_id),
                error=str(e),
                policy="fail_open",
            )
            return True

        allowed = count < self.limit_per_hour
        if not allowed:
            logger.info(
                "rate_limit_exceeded",
                user_id=str(user_id),
                count=count,
                limit=self.limit_per_hour,
            )
        return allowed
