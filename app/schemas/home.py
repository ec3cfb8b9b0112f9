"""
Pydantic schemas for home requests and responses.
Handles home CRUD payloads, list/detail shaping and camelCase wire names.
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from app.models.home import PropertyType


class CamelModel(BaseModel):
    """Base schema exposing camelCase names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class ImageCreate(CamelModel):
    """Image attached to a new home."""

    url: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="Public URL of the image",
        examples=["https://images.example.com/homes/1/front.jpg"]
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Image URL cannot be empty")
        return v


class HomeBase(CamelModel):
    """Base home schema with common fields."""

    address: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Street address",
        examples=["12 King Street West"]
    )

    number_of_bedrooms: int = Field(
        ...,
        ge=0,
        le=100,
        description="Number of bedrooms",
        examples=[3]
    )

    number_of_bathrooms: float = Field(
        ...,
        ge=0,
        le=100,
        description="Number of bathrooms (half baths allowed)",
        examples=[2.5]
    )

    city: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="City the home is located in",
        examples=["Toronto"]
    )

    price: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Asking price",
        examples=[750000]
    )

    land_size: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Land size",
        examples=[4400]
    )

    property_type: PropertyType = Field(
        default=PropertyType.RESIDENTIAL,
        description="Property type - residential or condo",
        examples=["RESIDENTIAL"]
    )

    @field_validator("address", "city")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v


class HomeCreate(HomeBase):
    """Schema for creating a home together with its images."""

    images: List[ImageCreate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("images", "image"),
        description="Images of the home, in display order"
    )


class HomeUpdate(CamelModel):
    """Schema for partial home updates. Only provided fields are applied."""

    address: Optional[str] = Field(None, min_length=1, max_length=255)
    number_of_bedrooms: Optional[int] = Field(None, ge=0, le=100)
    number_of_bathrooms: Optional[float] = Field(None, ge=0, le=100)
    city: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    land_size: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    property_type: Optional[PropertyType] = None

    @field_validator("address", "city")
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v

    @model_validator(mode="after")
    def validate_has_changes(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided for update")
        return self


class HomeResponse(CamelModel):
    """
    Home summary returned by list, create and update.

    Carries a single representative ``image`` URL instead of the image list.
    """

    id: int
    address: str
    number_of_bedrooms: int
    number_of_bathrooms: float
    city: str
    listed_date: Optional[datetime] = None
    price: float
    land_size: float
    property_type: PropertyType
    realtor_id: int
    image: Optional[str] = Field(
        None,
        description="URL of the first image, or null when the home has none"
    )


class RealtorResponse(CamelModel):
    """Public contact details of a listing's realtor."""

    id: int
    name: str
    email: str
    phone: str


class HomeDetailResponse(HomeResponse):
    """Single home with its realtor."""

    realtor: RealtorResponse
