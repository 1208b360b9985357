"""Rental house models."""

from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Furnishing(str, Enum):
    """Closed set of furnishing levels."""
    UNFURNISHED = "Unfurnished"
    SEMI_FURNISHED = "Semi-Furnished"
    FULLY_FURNISHED = "Fully Furnished"


class RentalHouseBase(BaseModel):
    """Fields shared by stored rentals and rentals submitted for creation."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    title: str = Field(..., description="Display name")
    monthly_rent: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("monthly_rent", "monthlyRent"),
        description="Rent per month"
    )
    deposit: float = Field(0, ge=0, description="Security deposit")
    location: str = Field(..., description="Free-text location")
    bedrooms: int = Field(..., ge=0, description="Number of bedrooms")
    bathrooms: int = Field(..., ge=0, description="Number of bathrooms")
    sqft: int = Field(..., ge=0, description="Floor area in square feet")
    furnishing: str = Field(..., description="Unfurnished, Semi-Furnished or Fully Furnished")
    available_from: str = Field(
        "",
        validation_alias=AliasChoices("available_from", "availableFrom"),
        description="Availability date (ISO yyyy-MM-dd), may be empty"
    )
    description: str = Field("", description="Rental description")
    images: list[str] = Field(default_factory=list, description="Ordered image references")
    amenities: list[str] = Field(default_factory=list, description="Amenity tags")

    @field_validator("available_from", "description", mode="before")
    @classmethod
    def _null_text_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def _null_list_to_empty(cls, v: object) -> object:
        return [] if v is None else v


class RentalHouse(RentalHouseBase):
    """A rental house as stored in the listing store."""
    id: str = Field(..., description="Store-assigned identifier (text)")
    created_at: Optional[str] = None


class RentalHouseCreate(RentalHouseBase):
    """A rental submitted through the admin form; the store assigns id and created_at."""
    title: str = Field(..., min_length=1, description="Display name")
    furnishing: Furnishing = Field(Furnishing.UNFURNISHED, description="Furnishing level")

    def to_row(self) -> dict:
        """Serialize for insertion into the rental_houses table."""
        return self.model_dump(mode="json")
