"""
Entity and identifier base classes.

Entities carry a typed UUID identifier. Identifiers are separate types per
entity so a DeckId cannot be passed where a GenerationId is expected.
"""

from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """UUID wrapper; subclass once per entity."""

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise TypeError(f"{type(self).__name__} expects a UUID, got {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        return cls(uuid4())

    def to_primitive(self) -> str:
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(Generic[IdType]):
    """Base for domain objects that are tracked by identity."""

    id: IdType
