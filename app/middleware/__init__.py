"""
Middleware package for the Realtor Home API.
Provides request tracking and request size validation.
"""

from .request import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware"
]
