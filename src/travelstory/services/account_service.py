"""Account service: registration and login against the credential store."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.core.security import hash_password, verify_password
from travelstory.models.user import User

from .errors import InvalidCredentialsError, UserExistsError, UserNotFoundError
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Service for user accounts."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = 10):
        self.db = db
        self.users = UserRepository(db)
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, full_name: str, email: str, password: str) -> User:
        """Create an account.

        Raises:
            UserExistsError: If the email is already registered (case-insensitive)
        """
        if await self.users.get_by_email(email) is not None:
            raise UserExistsError()

        user = User(
            full_name=full_name,
            email=email,
            hashed_password=hash_password(password, self.bcrypt_rounds),
        )
        await self.users.add(user)
        await self.db.commit()

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the matching user.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        user = await self.users.get_by_email(email)
        if user is None:
            raise InvalidCredentialsError("User not found")
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError("Invalid Credentials")
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        return user


__all__ = ["AccountService"]
