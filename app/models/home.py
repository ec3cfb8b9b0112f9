"""
Home model for real-estate listings.
Handles listing data, pricing, property type and realtor ownership.
"""

from sqlalchemy import String, Integer, Float, DateTime, Enum as SQLEnum, Index, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from datetime import datetime
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.image import Image


class PropertyType(str, enum.Enum):
    """Property type enumeration for listings."""
    RESIDENTIAL = "RESIDENTIAL"
    CONDO = "CONDO"


class Home(Base):
    """
    Home model for managing real-estate listings.
    Each home belongs to exactly one realtor and owns its images.
    """

    __tablename__ = "homes"

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Street address of the home"
    )

    number_of_bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of bedrooms"
    )

    number_of_bathrooms: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Number of bathrooms (half baths allowed)"
    )

    city: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="City the home is located in"
    )

    listed_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When the home was listed"
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        index=True,
        comment="Asking price"
    )

    land_size: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Land size"
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType),
        nullable=False,
        index=True,
        comment="Property type - residential or condo"
    )

    realtor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="ID of the realtor who listed this home"
    )

    # Relationships
    realtor: Mapped["User"] = relationship(
        "User",
        back_populates="homes"
    )

    images: Mapped[List["Image"]] = relationship(
        "Image",
        back_populates="home",
        order_by="Image.id",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the home."""
        return f"<Home(id={self.id}, city={self.city}, price={self.price})>"

    def to_dict(self, image: Optional[str] = None) -> dict:
        """
        Convert home to a summary dictionary.

        Args:
            image: Representative image URL for the listing, if any

        Returns:
            Dictionary representation of the home
        """
        return {
            "id": self.id,
            "address": self.address,
            "number_of_bedrooms": self.number_of_bedrooms,
            "number_of_bathrooms": self.number_of_bathrooms,
            "city": self.city,
            "listed_date": self.listed_date,
            "price": self.price,
            "land_size": self.land_size,
            "property_type": self.property_type,
            "realtor_id": self.realtor_id,
            "image": image,
        }


# Composite index for the list filters (city, price range, type)
city_price_type_index = Index(
    'idx_homes_city_price_type',
    Home.city,
    Home.price,
    Home.property_type
)
