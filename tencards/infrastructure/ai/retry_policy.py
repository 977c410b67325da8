"""
Retry strategy for model provider calls, built on tenacity.

Timeouts, network errors, 429 and 5xx responses are retried until the attempt
budget runs out. A 429 waits exactly as long as its ``Retry-After`` header
asks; everything else backs off exponentially with ±25% jitter.
"""

import math
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from tencards.infrastructure.ai.exceptions import (
    ModelAPIError,
    ModelNetworkError,
    ModelTimeoutError,
)

JITTER_RATIO = 0.25


@dataclass(frozen=True)
class RetryConfig:
    """Attempt budget and backoff curve."""

    attempts: int = 3
    factor: float = 2.0
    min_timeout_ms: int = 1000
    max_backoff_ms: int = 30000


def parse_retry_after(value: str | None, now: datetime) -> float | None:
    """
    Parse a Retry-After header into milliseconds.

    Accepts delta-seconds or an HTTP date. Returns None when the header is
    missing or unparseable; dates in the past yield 0.
    """
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(0.0, seconds * 1000) if math.isfinite(seconds) else None

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)
    return max(0.0, (retry_at - now).total_seconds() * 1000)


def is_retryable(error: BaseException) -> bool:
    if isinstance(error, ModelTimeoutError | ModelNetworkError):
        return True
    if isinstance(error, ModelAPIError):
        return error.status_code == 429 or error.status_code >= 500
    return False


class JitteredWait(wait_base):
    """Scale another wait by a random factor in [1 - ratio, 1 + ratio], then cap it."""

    def __init__(
        self,
        wait: wait_base,
        cap_s: float,
        ratio: float = JITTER_RATIO,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.wait = wait
        self.cap_s = cap_s
        self.ratio = ratio
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        base = self.wait(retry_state)
        jittered = base * (1 + self.ratio * (2 * self.rng() - 1))
        return max(0.0, min(jittered, self.cap_s))


class RetryAfterWait(wait_base):
    """Honour a rate-limit response's Retry-After; defer to ``fallback`` otherwise."""

    def __init__(self, fallback: wait_base, now: Callable[[], datetime]) -> None:
        self.fallback = fallback
        self.now = now

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, ModelAPIError) and error.status_code == 429:
            delay_ms = parse_retry_after(error.retry_after, self.now())
            if delay_ms is not None:
                return delay_ms / 1000
        return self.fallback(retry_state)


class RetryPolicy:
    """Builds the tenacity controller used for every provider request."""

    def __init__(
        self,
        config: RetryConfig | None = None,
        rng: Callable[[], float] = random.random,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.config = config or RetryConfig()
        backoff = JitteredWait(
            wait_exponential(
                multiplier=self.config.min_timeout_ms / 1000, exp_base=self.config.factor
            ),
            cap_s=self.config.max_backoff_ms / 1000,
            rng=rng,
        )
        self.wait = RetryAfterWait(backoff, now)

    def retrying(
        self,
        sleep: Callable[[float], Awaitable[None]],
        before_sleep: Callable[[RetryCallState], None] | None = None,
    ) -> AsyncRetrying:
        """
        Create a controller for one request.

        The final failure is re-raised as-is so callers see the provider error,
        not a ``tenacity.RetryError``.
        """
        return AsyncRetrying(
            stop=stop_after_attempt(self.config.attempts),
            wait=self.wait,
            retry=retry_if_exception(is_retryable),
            sleep=sleep,
            before_sleep=before_sleep,
            reraise=True,
        )
