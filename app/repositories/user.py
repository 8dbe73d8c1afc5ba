"""
User repository for account lookups and registration.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from app.repositories.base import BaseRepository
from app.models.user import User
from app.schemas.user import UserCreate, UserRecord, normalize_email
from app.utils.exceptions import DuplicateResourceError, RepositoryError
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Emails are stored and compared lowercased.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """
        Get a single user by email address.

        Args:
            email: Email address, compared case-insensitively

        Returns:
            The user record, or None if no user has that email

        Raises:
            RepositoryError: If the query fails
        """
        user = await self.get_by_field("email", normalize_email(email))
        return UserRecord.model_validate(user) if user else None

    async def get_user(self, user_id: int) -> Optional[UserRecord]:
        """
        Get a single user by id.

        Returns:
            The user record, or None if not found
        """
        user = await self.get_by_id(user_id)
        return UserRecord.model_validate(user) if user else None

    async def create_user(self, user_data: UserCreate) -> UserRecord:
        """
        Create a new user.

        Args:
            user_data: Validated user fields

        Returns:
            The persisted user including its generated id

        Raises:
            DuplicateResourceError: If the email is already registered
            RepositoryError: If the insert fails
        """
        existing_user = await self.get_by_field("email", user_data.email)
        if existing_user:
            raise DuplicateResourceError("User", user_data.email)

        try:
            user = await self.create(user_data.model_dump())
        except RepositoryError as e:
            # Lost a race with a concurrent insert of the same email
            if isinstance(e.__cause__, IntegrityError):
                raise DuplicateResourceError("User", user_data.email) from e.__cause__
            raise

        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return UserRecord.model_validate(user)
