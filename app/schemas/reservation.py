"""
Pydantic schemas for reservation inserts and records.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import date
from app.schemas.property import PropertyRecord


class ReservationCreate(BaseModel):
    """Schema for creating a reservation."""

    property_id: int = Field(..., description="Reserved property")
    guest_id: int = Field(..., description="Guest making the reservation")
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_dates(self):
        """Validate that the stay does not end before it starts."""
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ReservationRecord(BaseModel):
    """
    A persisted reservations row.
    Guest listings also carry the reserved property with its average rating.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    guest_id: int
    start_date: date
    end_date: date
    property: Optional[PropertyRecord] = None
