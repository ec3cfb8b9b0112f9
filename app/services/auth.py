"""
Authentication service for signup, signin, product keys and token resolution.
Handles JWT token generation, validation and user type business rules.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.repositories.user import UserRepository, DuplicateEmailError
from app.models.user import User, UserType
from app.schemas.auth import SignupRequest, TokenResponse
from app.utils.auth import (
    create_access_token,
    verify_token,
    generate_product_key,
    verify_product_key
)
from app.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidProductKeyError,
    TokenExpiredError,
    BadRequestError,
    ValidationError,
    DuplicateResourceError,
    InsufficientPermissionsError
)
from jose import JWTError, ExpiredSignatureError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing user signup, signin and authorization.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def signup(self, signup_data: SignupRequest, user_type: UserType) -> TokenResponse:
        """
        Register a new user and return an access token.

        Args:
            signup_data: Validated signup body
            user_type: Requested user type from the path

        Returns:
            Token response for the new user

        Raises:
            InvalidProductKeyError: If a non-buyer signup lacks a valid product key
            DuplicateResourceError: If the email is already registered
        """
        if user_type != UserType.BUYER:
            if not signup_data.product_key:
                raise InvalidProductKeyError("Product key is required for this user type")
            if not verify_product_key(signup_data.product_key, signup_data.email, user_type):
                logger.warning(f"Invalid product key for {signup_data.email} as {user_type.value}")
                raise InvalidProductKeyError()

        if not await self.user_repo.check_email_availability(signup_data.email):
            raise DuplicateResourceError("User", signup_data.email)

        try:
            user = await self.user_repo.create_user({
                "name": signup_data.name,
                "phone": signup_data.phone,
                "email": signup_data.email,
                "password": signup_data.password,
                "user_type": user_type
            })
        except DuplicateEmailError:
            raise DuplicateResourceError("User", signup_data.email)
        except ValueError as e:
            raise ValidationError(str(e))
        except Exception as e:
            logger.error(f"Failed to sign up {signup_data.email}: {e}")
            raise BadRequestError("Failed to create user")

        logger.info(f"User signed up: {user.email} as {user_type.value}")
        return self.create_token_response(user)

    async def signin(self, email: str, password: str) -> TokenResponse:
        """
        Authenticate user with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return self.create_token_response(user)

    def generate_product_key(self, email: str, user_type: UserType, current_user: User) -> str:
        """
        Issue a product key for ``email`` to sign up as ``user_type``.

        Raises:
            InsufficientPermissionsError: If the caller is not an admin
        """
        if not current_user.is_admin:
            raise InsufficientPermissionsError("generate product keys")

        logger.info(f"Product key generated by {current_user.email} for {email} as {user_type.value}")
        return generate_product_key(email, user_type)

    def create_token_response(self, user: User) -> TokenResponse:
        access_token = create_access_token(
            user_id=user.id,
            email=user.email,
            user_type=user.user_type
        )
        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60
        )

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Raises:
            InvalidTokenError: If token is invalid or the user no longer exists
            TokenExpiredError: If token is expired
        """
        try:
            token_payload = verify_token(token, token_type="access")
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))

        user = await self.get_user_by_id(token_payload.user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")

        return user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        try:
            return await self.user_repo.get_by_id(user_id)
        except Exception as e:
            logger.error(f"Failed to get user by ID {user_id}: {e}")
            raise BadRequestError("Failed to retrieve user")
