"""
Database models for the Realtor Home API.
Includes User, Home, and Image models with relationships.
"""

from app.models.user import User, UserType
from app.models.home import Home, PropertyType
from app.models.image import Image

# Export all models for easy importing
__all__ = [
    "User",
    "UserType",
    "Home",
    "PropertyType",
    "Image",
]
