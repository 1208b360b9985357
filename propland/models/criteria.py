"""Filter criteria and sort keys for listing browsing.

Criteria fields hold the raw values a user typed (strings from a form or query
string, or numbers from code). They are interpreted by the filter engine, which
treats empty or unparseable values as "no constraint" instead of failing.
"""

from enum import Enum
from typing import Mapping, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

RawValue = Optional[Union[int, float, str]]

ALL = "all"


class SortKey(str, Enum):
    """Supported orderings for listing results."""
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    SIZE = "size"

    @classmethod
    def parse(cls, value: Union["SortKey", str, None]) -> "SortKey":
        """Resolve a sort key, falling back to NEWEST for anything unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


def _first(value):
    # parse_qs yields lists
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


class _Criteria(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_query(cls, params: Mapping) -> "_Criteria":
        """Build criteria from query-string parameters (snake_case or camelCase keys)."""
        values = {}
        for name, field in cls.model_fields.items():
            keys = [name]
            if isinstance(field.validation_alias, AliasChoices):
                keys.extend(k for k in field.validation_alias.choices if isinstance(k, str))
            for key in keys:
                if key in params:
                    values[name] = _first(params[key])
                    break
        return cls(**values)


class PlotCriteria(_Criteria):
    """Optional constraints for plot browsing."""
    min_price: RawValue = Field(None, validation_alias=AliasChoices("min_price", "minPrice"))
    max_price: RawValue = Field(None, validation_alias=AliasChoices("max_price", "maxPrice"))
    min_size: RawValue = Field(None, validation_alias=AliasChoices("min_size", "minSize"))
    max_size: RawValue = Field(None, validation_alias=AliasChoices("max_size", "maxSize"))
    location: Optional[str] = Field(None, description="Case-insensitive substring")
    type: Optional[str] = Field(None, description="Exact plot type, or 'all'")


class RentalCriteria(_Criteria):
    """Optional constraints for rental browsing."""
    min_rent: RawValue = Field(None, validation_alias=AliasChoices("min_rent", "minRent"))
    max_rent: RawValue = Field(None, validation_alias=AliasChoices("max_rent", "maxRent"))
    bedrooms: RawValue = Field(None, description="Exact count; 5 means 5 or more")
    bathrooms: RawValue = Field(None, description="Exact count; 4 means 4 or more")
    location: Optional[str] = Field(None, description="Case-insensitive substring")
    furnishing: Optional[str] = Field(None, description="Exact furnishing level, or 'all'")
