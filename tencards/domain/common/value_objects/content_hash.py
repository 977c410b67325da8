"""Fingerprint of generation source text."""

import hashlib
import re
from dataclasses import dataclass
from typing import Self

from ..value_object import ValueObject

_SHA256_HEX = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class ContentHash(ValueObject):
    """
    Lowercase SHA-256 hex digest of trimmed text.

    Stored on the generation audit record in place of the text, so repeated
    submissions can be spotted without keeping what users pasted.
    """

    value: str

    def __post_init__(self) -> None:
        if not _SHA256_HEX.fullmatch(self.value):
            raise ValueError(f"Not a SHA-256 hex digest: {self.value!r}")

    @classmethod
    def compute(cls, content: str) -> Self:
        """
        Hash text after stripping surrounding whitespace.

        Raises:
            ValueError: If nothing is left after stripping
        """
        normalized = content.strip()
        if not normalized:
            raise ValueError("Cannot fingerprint empty text")
        return cls(hashlib.sha256(normalized.encode("utf-8")).hexdigest())

    def __str__(self) -> str:
        return self.value
