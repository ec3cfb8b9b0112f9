"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for route protection and user extraction.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.models.user import User, UserType
from app.services.auth import AuthService
from app.services.home import HomeService
from app.utils.exceptions import (
    UnauthorizedError,
    InsufficientPermissionsError
)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_home_service(db: AsyncSession = Depends(get_db)) -> HomeService:
    return HomeService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If no token was sent
        InvalidTokenError: If the token is invalid or its user is gone
        TokenExpiredError: If the token is expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


async def get_current_realtor_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current user with realtor type (or admin).

    Raises:
        InsufficientPermissionsError: If user is a buyer
    """
    if current_user.user_type not in (UserType.REALTOR, UserType.ADMIN):
        raise InsufficientPermissionsError("access realtor resources")

    return current_user


async def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current user with admin type.

    Raises:
        InsufficientPermissionsError: If user is not an admin
    """
    if not current_user.is_admin:
        raise InsufficientPermissionsError("access admin resources")

    return current_user
