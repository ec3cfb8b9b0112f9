"""
User model with authentication and user type management.
Handles buyer, realtor and administrator accounts.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.home import Home

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 5


class UserType(str, enum.Enum):
    """User type enumeration for access control and product keys."""
    BUYER = "BUYER"
    REALTOR = "REALTOR"
    ADMIN = "ADMIN"


class User(Base):
    """
    User model for authentication and authorization.
    Realtors own the homes they list.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User's display name"
    )

    phone: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Contact phone number"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    user_type: Mapped[UserType] = mapped_column(
        SQLEnum(UserType),
        nullable=False,
        default=UserType.BUYER,
        index=True,
        comment="User type for access control"
    )

    # Relationships
    homes: Mapped[List["Home"]] = relationship(
        "Home",
        back_populates="realtor"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email}, user_type={self.user_type})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Raises:
            ValueError: If password is too short
        """
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.password)

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN

    @property
    def is_realtor(self) -> bool:
        return self.user_type == UserType.REALTOR

    def can_manage_home(self, home_realtor_id: int) -> bool:
        """
        Check if user can manage a specific home.

        Args:
            home_realtor_id: ID of the home's realtor

        Returns:
            True if user can manage the home, False otherwise
        """
        # Admins can manage all homes
        if self.is_admin:
            return True

        # Realtors can only manage their own listings
        return self.id == home_realtor_id

    def to_realtor_dict(self) -> dict:
        """Public contact details shown alongside a listing."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }
