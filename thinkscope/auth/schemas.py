"""Auth request/response schemas."""

from pydantic import EmailStr

from thinkscope.schemas import CamelModel
from thinkscope.users.schemas import UserResponse


class LoginRequest(CamelModel):
    """Login request model."""

    email: EmailStr
    password: str


class AuthPayload(CamelModel):
    """Bearer token plus the user it was issued for."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
