from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from thinkscope.schemas import CamelModel


class UserCreate(CamelModel):
    """Schema for creating a user."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class UserUpdate(CamelModel):
    """Schema for editing the profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None


class UserResponse(CamelModel):
    """Schema for user response."""

    id: UUID
    name: str
    email: str
    created_at: datetime
