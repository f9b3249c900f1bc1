"""AuthContext and the ``CurrentAuth`` dependency.

Pairs the authenticated user with the request's AsyncSession so feature
routers take one parameter instead of separate user_id/session pairs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from thinkscope.auth.dependencies import UserId
from thinkscope.auth.exceptions import InvalidTokenError
from thinkscope.database.session import DbSession
from thinkscope.users.models import User


if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class AuthContext:
    """Request-scoped user context."""

    def __init__(self, user: User, session: AsyncSession) -> None:
        self.user = user
        self.session = session

    @property
    def user_id(self) -> UUID:
        """Id of the authenticated user."""
        return self.user.id


async def get_auth_context(user_id: UserId, session: DbSession) -> AuthContext:
    """Build an AuthContext for the current request.

    A token whose user no longer exists is rejected like an invalid one.
    """
    user = await session.get(User, user_id)
    if user is None:
        raise InvalidTokenError
    return AuthContext(user=user, session=session)


CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
