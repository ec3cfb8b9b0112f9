"""
API route handlers for the Realtor Home API.
Provides organized routing for different API endpoints.
"""

from .auth import router as auth_router
from .home import router as home_router

__all__ = ["auth_router", "home_router"]
