"""
Service layer for business logic implementation.
Contains services for authentication, home management, and error handling.
"""

from .auth import AuthService
from .home import HomeService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "HomeService",
    "ErrorHandlerService"
]
