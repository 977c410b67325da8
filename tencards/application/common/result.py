"""
Result type for operations that report failure as data.

The model client returns these instead of raising, so callers branch on a
uniform error shape.

Example:
    result = await client.send_message("ping")
    if result.is_failure:
        logger.warning("ping_failed", code=result.unwrap_error().code)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    is_success = True
    is_failure = False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> None:
        raise ValueError("Success has no error")


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    is_success = False
    is_failure = True

    def unwrap(self) -> None:
        raise ValueError(f"Failure has no value: {self.error!r}")

    def unwrap_error(self) -> E:
        return self.error


Result = Success[T] | Failure[E]
