"""
Pydantic schemas for property reviews.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ReviewCreate(BaseModel):
    """Schema for creating a property review."""

    guest_id: int
    property_id: int
    reservation_id: int
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    message: Optional[str] = None


class ReviewRecord(BaseModel):
    """A persisted property_reviews row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_id: int
    property_id: int
    reservation_id: int
    rating: int
    message: Optional[str] = None
