from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from tencards.core import container
from tencards.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The container's ``db`` dependency is bound to the request-scoped session
    while the provider builds the use case and its repositories.
    """

    def dependency(db: DatabaseSession) -> T:
        try:
            container.db.override(db)
            return provider()
        finally:
            container.db.reset_override()

    return dependency
