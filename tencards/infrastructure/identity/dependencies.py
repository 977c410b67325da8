"""FastAPI dependencies for caller identity."""

from typing import Annotated
from uuid import UUID

from fastapi import Header

from tencards.exceptions import UnauthorizedError


async def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> UUID:
    """
    Get the ID of the calling user.

    Authentication happens upstream; the gateway forwards the authenticated
    user's ID in the ``X-User-Id`` header.

    Raises:
        UnauthorizedError: If the header is missing or not a UUID
    """
    if not x_user_id:
        raise UnauthorizedError
    try:
        return UUID(x_user_id.strip())
    except ValueError:
        raise UnauthorizedError from None
