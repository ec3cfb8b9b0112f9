"""
Authentication utilities for JWT token management and realtor product keys.
"""

import hashlib
import hmac
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from app.config import settings
from app.models.user import UserType, pwd_context


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, user_id: int, email: str, user_type: Optional[str], exp: datetime):
        self.user_id = user_id
        self.email = email
        self.user_type = user_type
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=int(data["sub"]),
            email=data["email"],
            user_type=data.get("user_type"),
            exp=datetime.utcfromtimestamp(data["exp"])
        )


def create_access_token(
    user_id: int,
    email: str,
    user_type: UserType,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: User's ID
        email: User's email address
        user_type: User's type (buyer/realtor/admin)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user_id),  # Subject (user ID)
        "email": email,
        "user_type": user_type.value,
        "exp": expire,
        "iat": datetime.utcnow(),  # Issued at
        "type": "access"
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, token_type: str = "access") -> TokenPayload:
    """
    Verify and decode JWT token.

    Args:
        token: JWT token string
        token_type: Expected token type

    Returns:
        Decoded TokenPayload

    Raises:
        ExpiredSignatureError: If token is expired
        JWTError: If token is otherwise invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )

        if payload.get("type") != token_type:
            raise JWTError(f"Invalid token type. Expected {token_type}")

        if not payload.get("sub") or not payload.get("email"):
            raise JWTError("Invalid token payload")

        return TokenPayload.from_dict(payload)

    except JWTError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise JWTError(f"Token validation error: {str(e)}")


def _product_key_source(email: str, user_type: UserType) -> str:
    # bcrypt reads at most 72 bytes; the HMAC digest keeps the secret inside them
    message = f"{email.lower()}-{user_type.value}".encode("utf-8")
    return hmac.new(settings.product_key_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def generate_product_key(email: str, user_type: UserType) -> str:
    """
    Generate a product key allowing ``email`` to sign up as ``user_type``.

    The key is a bcrypt hash, so each call yields a different string that
    still verifies against the same email and user type.
    """
    return pwd_context.hash(_product_key_source(email, user_type))


def verify_product_key(product_key: str, email: str, user_type: UserType) -> bool:
    """Check a product key against the email and user type it was issued for."""
    try:
        return pwd_context.verify(_product_key_source(email, user_type), product_key)
    except (ValueError, TypeError):
        # Not a bcrypt hash at all
        return False
