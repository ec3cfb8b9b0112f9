"""
Pydantic schemas for authentication requests and responses.
Handles signup, signin, product key generation and user data validation.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
from app.models.user import UserType, MIN_PASSWORD_LENGTH


class AuthModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(AuthModel):
    """Signup request schema."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Jane Realtor"]
    )
    phone: str = Field(
        ...,
        max_length=50,
        description="Contact phone number",
        examples=["(555) 555-5555"]
    )
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=128,
        description=f"User's password (minimum {MIN_PASSWORD_LENGTH} characters)",
        examples=["secret1"]
    )
    product_key: Optional[str] = Field(
        None,
        min_length=1,
        description="Product key, required for realtor and admin signups"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()

    @field_validator("product_key")
    @classmethod
    def validate_product_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Product key cannot be empty")
        return v


class SigninRequest(AuthModel):
    """Signin request schema."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        description="User's password"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()


class GenerateProductKeyRequest(AuthModel):
    """Request for a product key that lets ``email`` sign up as ``user_type``."""

    email: EmailStr
    user_type: UserType

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()


class TokenResponse(AuthModel):
    """Token response schema, serialized as accessToken, tokenType and expiresIn."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds")


class ProductKeyResponse(AuthModel):
    product_key: str


class UserResponse(AuthModel):
    """User response schema (excluding the password hash)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    phone: str
    email: str
    user_type: UserType
    created_at: Optional[datetime] = None
