"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    SignupRequest,
    SigninRequest,
    GenerateProductKeyRequest,
    TokenResponse,
    ProductKeyResponse,
    UserResponse
)

# Home schemas
from .home import (
    ImageCreate,
    HomeBase,
    HomeCreate,
    HomeUpdate,
    HomeResponse,
    HomeDetailResponse,
    RealtorResponse
)

__all__ = [
    # Authentication
    "SignupRequest",
    "SigninRequest",
    "GenerateProductKeyRequest",
    "TokenResponse",
    "ProductKeyResponse",
    "UserResponse",

    # Home
    "ImageCreate",
    "HomeBase",
    "HomeCreate",
    "HomeUpdate",
    "HomeResponse",
    "HomeDetailResponse",
    "RealtorResponse"
]
