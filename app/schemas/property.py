"""
Pydantic schemas for property inserts, search filters and records.
Handles conversion of major-unit prices to stored minor units.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, Optional
from decimal import Decimal
from app.utils.currency import to_minor_units


class PropertyCreate(BaseModel):
    """
    Schema for creating a new property.
    cost_per_night is given in major units and stored multiplied by 100.
    """

    owner_id: int = Field(..., description="ID of the owning user")

    title: str = Field(..., min_length=1, max_length=255, description="Property listing title")
    description: Optional[str] = Field(None, description="Detailed property description")
    thumbnail_photo_url: str = Field(..., min_length=1, max_length=255)
    cover_photo_url: str = Field(..., min_length=1, max_length=255)

    cost_per_night: Decimal = Field(
        ...,
        ge=0,
        description="Nightly price in major currency units"
    )

    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)

    country: str = Field(..., min_length=1, max_length=255)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., min_length=1, max_length=255)
    post_code: str = Field(..., min_length=1, max_length=255)

    @field_validator("title", "city")
    @classmethod
    def strip_text(cls, v):
        """Validate and clean required text."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    def to_row(self) -> Dict[str, Any]:
        """Column values for the properties insert, price in minor units."""
        row = self.model_dump()
        row["cost_per_night"] = to_minor_units(self.cost_per_night)
        return row


class PropertySearchFilters(BaseModel):
    """
    Optional, independently applied property search criteria.
    A field is applied when it is not None, so 0 and "" are real filters.
    """

    city: Optional[str] = Field(None, description="Case-insensitive substring of the city")
    owner_id: Optional[int] = Field(None, description="Exact owner match")
    minimum_price_per_night: Optional[Decimal] = Field(None, ge=0, description="Major units")
    maximum_price_per_night: Optional[Decimal] = Field(None, ge=0, description="Major units")
    minimum_rating: Optional[float] = Field(None, ge=0, le=5, description="Minimum average rating")

    @model_validator(mode="after")
    def validate_price_range(self):
        """Validate that the minimum price does not exceed the maximum."""
        if (
            self.minimum_price_per_night is not None
            and self.maximum_price_per_night is not None
            and self.minimum_price_per_night > self.maximum_price_per_night
        ):
            raise ValueError("minimum_price_per_night cannot exceed maximum_price_per_night")
        return self


class PropertyRecord(BaseModel):
    """A persisted properties row, optionally with its average review rating."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    country: str
    street: str
    city: str
    province: str
    post_code: str
    active: bool = True
    average_rating: Optional[float] = None
