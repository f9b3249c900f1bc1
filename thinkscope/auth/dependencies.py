"""FastAPI authentication dependencies.

The bearer token is the only credential; there is no cookie or session
fallback.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from thinkscope.auth.exceptions import MissingTokenError
from thinkscope.auth.security import decode_access_token


logger = logging.getLogger(__name__)


def _extract_token_from_request(request: Request) -> str | None:
    """Extract the JWT from the Authorization header."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_user_id(request: Request) -> UUID:
    """Resolve the authenticated user id or reject the request."""
    token = _extract_token_from_request(request)
    if not token:
        logger.debug("Missing or malformed Authorization header on %s", request.url.path)
        raise MissingTokenError

    user_id = decode_access_token(token)
    request.state.user_id = user_id
    return user_id


# Usage: async def my_route(user_id: UserId) -> Response:
UserId = Annotated[UUID, Depends(get_user_id)]
