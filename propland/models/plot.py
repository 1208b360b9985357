"""Plot (land listing) models."""

from enum import Enum
from typing import Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PlotType(str, Enum):
    """Closed set of plot types."""
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    AGRICULTURAL = "Agricultural"
    INDUSTRIAL = "Industrial"


class SizeUnit(str, Enum):
    """Units a plot size may be expressed in. Sizes are never converted between them."""
    SQ_FT = "sq ft"
    ACRES = "acres"


class PlotBase(BaseModel):
    """Fields shared by stored plots and plots submitted for creation."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    title: str = Field(..., description="Display name")
    price: float = Field(..., ge=0, description="Asking price, currency-agnostic")
    location: str = Field(..., description="Free-text location")
    size: float = Field(..., ge=0, description="Plot size in size_unit")
    size_unit: str = Field(
        SizeUnit.SQ_FT.value,
        validation_alias=AliasChoices("size_unit", "sizeUnit"),
        description="'sq ft' or 'acres'"
    )
    dimensions: str = Field("", description="Descriptive dimensions, e.g. 40x60 ft")
    type: str = Field(..., description="Residential, Commercial, Agricultural or Industrial")
    description: str = Field("", description="Plot description")
    images: list[str] = Field(default_factory=list, description="Ordered image references")
    features: list[str] = Field(default_factory=list, description="Feature tags")

    @field_validator("dimensions", "description", mode="before")
    @classmethod
    def _null_text_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("images", "features", mode="before")
    @classmethod
    def _null_list_to_empty(cls, v: object) -> object:
        return [] if v is None else v


class Plot(PlotBase):
    """A plot as stored in the listing store."""
    id: str = Field(..., description="Store-assigned identifier (text)")
    created_at: Optional[str] = None


class PlotCreate(PlotBase):
    """A plot submitted through the admin form; the store assigns id and created_at."""
    title: str = Field(..., min_length=1, description="Display name")
    size: float = Field(..., gt=0, description="Plot size in size_unit")
    size_unit: Literal["sq ft", "acres"] = Field(
        "sq ft",
        validation_alias=AliasChoices("size_unit", "sizeUnit"),
        description="'sq ft' or 'acres'"
    )
    type: PlotType = Field(..., description="Plot type")

    def to_row(self) -> dict:
        """Serialize for insertion into the plots table."""
        return self.model_dump(mode="json")
