import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from thinkscope.auth.security import get_password_hash, verify_password
from thinkscope.exceptions import ConflictError
from thinkscope.users.models import User
from thinkscope.users.schemas import UserCreate, UserUpdate


logger = logging.getLogger(__name__)


class UserService:
    """Service for handling user operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_user(self, data: UserCreate) -> User:
        """
        Create a new user with a hashed password.

        Parameters
        ----------
        data : UserCreate
            Signup data

        Returns
        -------
        User
            Created user instance

        Raises
        ------
        ConflictError
            If the email is already registered
        """
        email = data.email.lower()
        logger.info("Creating new user with email: %s", email)
        user = User(name=data.name.strip(), email=email, password_hash=get_password_hash(data.password))
        self._session.add(user)

        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            msg = "User already exists"
            raise ConflictError(msg) from e

        logger.info("Created user with ID: %s", user.id)
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email, or None."""
        result = await self._session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the password matches, else None.

        Rehashes the stored password when the hasher asks for it.
        """
        user = await self.get_user_by_email(email)
        if not user:
            return None

        verified, updated_hash = verify_password(password, user.password_hash)
        if not verified:
            return None

        if updated_hash:
            user.password_hash = updated_hash
            await self._session.commit()

        return user

    async def update_user(self, user: User, data: UserUpdate) -> User:
        """Apply profile edits (name, email)."""
        if data.name is not None:
            user.name = data.name.strip()
        if data.email is not None:
            user.email = data.email.lower()

        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            msg = "Email is already in use"
            raise ConflictError(msg) from e

        logger.info("Updated profile for user %s", user.id)
        return user
