"""
Utility modules for the Realtor Home API.
"""

from .auth import (
    create_access_token,
    verify_token,
    generate_product_key,
    verify_product_key,
    TokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    PayloadTooLargeError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InvalidProductKeyError,
    InsufficientPermissionsError,
    HomeNotFoundError,
    DuplicateResourceError
)

from .validators import ValidationResult, validate_schema

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "generate_product_key",
    "verify_product_key",
    "TokenPayload",

    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "PayloadTooLargeError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InvalidProductKeyError",
    "InsufficientPermissionsError",
    "HomeNotFoundError",
    "DuplicateResourceError",

    # Validation
    "ValidationResult",
    "validate_schema",
]
