"""Typed identifiers for the learning context."""

from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    pass


@dataclass(frozen=True)
class DeckId(EntityId):
    pass


@dataclass(frozen=True)
class FlashcardId(EntityId):
    pass


@dataclass(frozen=True)
class GenerationId(EntityId):
    """Identifier of a generation audit record; also returned to the client."""


@dataclass(frozen=True)
class GenerationErrorLogId(EntityId):
    pass
