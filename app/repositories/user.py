"""
User repository for authentication and user management operations.
Provides secure user operations with password handling and user type support.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from app.repositories.base import BaseRepository
from app.models.user import User, UserType
from app.models.home import Home
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class DuplicateEmailError(ValueError):
    """Raised when a user with the same email is already registered."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication support.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: name, phone, email, password
                      Optional: user_type (defaults to BUYER)

        Returns:
            Created user instance

        Raises:
            DuplicateEmailError: If the email is taken, including by a concurrent insert
            ValueError: If validation fails
        """
        try:
            email = User.validate_email_format(user_data["email"])

            existing_user = await self.get_by_email(email)
            if existing_user:
                raise DuplicateEmailError(email)

            data = dict(user_data)
            password = data.pop("password")

            create_data = {
                **data,
                "email": email,
                "password": User.hash_password(password),
                "user_type": data.get("user_type") or UserType.BUYER,
            }

            try:
                created_user = await self.create(create_data)
            except IntegrityError as e:
                # Lost a race with another signup for the same email
                raise DuplicateEmailError(email) from e

            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()

            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        try:
            user = await self.get_by_email(email)

            if not user:
                logger.debug(f"Authentication failed: user {email} not found")
                return None

            if not user.verify_password(password):
                logger.debug(f"Authentication failed: invalid password for {email}")
                return None

            logger.info(f"User authenticated successfully: {email}")
            return user
        except Exception as e:
            logger.error(f"Failed to authenticate user {email}: {e}")
            raise

    async def check_email_availability(self, email: str) -> bool:
        """Return True if no user is registered with ``email``."""
        return await self.get_by_email(email) is None

    async def get_realtor_by_home_id(self, home_id: int) -> Optional[User]:
        """
        Get the realtor who listed a home.

        Args:
            home_id: ID of the home

        Returns:
            The owning user, or None if the home does not exist
        """
        try:
            query = (
                select(User)
                .join(Home, Home.realtor_id == User.id)
                .where(Home.id == home_id)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get realtor for home {home_id}: {e}")
            raise
