"""Protocol for Deck lookups used by the generation workflow."""

from typing import Protocol

from tencards.domain.common.value_objects import DeckId, UserId
from tencards.domain.learning.entities import Deck


class DeckRepositoryProtocol(Protocol):
    """Read-only deck access. Deck CRUD lives in a separate service."""

    def find_by_id(self, deck_id: DeckId) -> Deck | None:
        """
        Find a deck by ID regardless of owner.

        Ownership is checked by the caller so that "not found" and
        "forbidden" stay distinguishable.
        """
        ...

    def find_most_recently_updated(self, user_id: UserId) -> Deck | None:
        """Return the user's deck with the latest updated_at, if any."""
        ...
