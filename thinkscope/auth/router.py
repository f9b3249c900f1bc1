"""Authentication routes for signup, login and the current user."""

import logging

from fastapi import APIRouter, Request, status

from thinkscope.auth.context import CurrentAuth
from thinkscope.auth.exceptions import InvalidCredentialsError
from thinkscope.auth.schemas import AuthPayload, LoginRequest
from thinkscope.auth.security import create_access_token
from thinkscope.database.session import DbSession
from thinkscope.middleware.security import auth_rate_limit
from thinkscope.schemas import Envelope
from thinkscope.users.schemas import UserCreate, UserResponse
from thinkscope.users.service import UserService


router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@auth_rate_limit
async def signup(request: Request, data: UserCreate, session: DbSession) -> Envelope[AuthPayload]:  # noqa: ARG001
    """Create a new user account and return a bearer token."""
    service = UserService(session)
    user = await service.create_user(data)
    token = create_access_token(user.id)
    return Envelope[AuthPayload](data=AuthPayload(token=token, user=UserResponse.model_validate(user)))


@router.post("/login")
@auth_rate_limit
async def login(request: Request, data: LoginRequest, session: DbSession) -> Envelope[AuthPayload]:  # noqa: ARG001
    """Login with email and password."""
    service = UserService(session)
    user = await service.authenticate(data.email, data.password)
    if not user:
        logger.info("Failed login for %s", data.email)
        raise InvalidCredentialsError

    token = create_access_token(user.id)
    logger.info("User %s logged in", user.id)
    return Envelope[AuthPayload](data=AuthPayload(token=token, user=UserResponse.model_validate(user)))


@router.get("/me")
async def get_current_user(auth: CurrentAuth) -> Envelope[UserResponse]:
    """Get the authenticated user's profile."""
    return Envelope[UserResponse](data=UserResponse.model_validate(auth.user))
