"""Application common module: shared building blocks for use cases."""

from .result import Failure, Result, Success

__all__ = [
    "Failure",
    "Result",
    "Success",
]
