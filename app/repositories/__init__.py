"""
Repository layer for data access operations.
Provides async database operations with proper error handling.
"""

from app.repositories.base import BaseRepository
from app.repositories.home import HomeRepository
from app.repositories.image import ImageRepository
from app.repositories.user import UserRepository, DuplicateEmailError

__all__ = [
    "BaseRepository",
    "HomeRepository",
    "ImageRepository",
    "UserRepository",
    "DuplicateEmailError"
]
