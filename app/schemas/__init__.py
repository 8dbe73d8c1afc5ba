"""
Pydantic schemas for inputs and returned records.
"""

# User schemas
from .user import UserCreate, UserRecord

# Property schemas
from .property import PropertyCreate, PropertyRecord, PropertySearchFilters

# Reservation schemas
from .reservation import ReservationCreate, ReservationRecord

# Review schemas
from .review import ReviewCreate, ReviewRecord

__all__ = [
    # User
    "UserCreate",
    "UserRecord",

    # Property
    "PropertyCreate",
    "PropertyRecord",
    "PropertySearchFilters",

    # Reservation
    "ReservationCreate",
    "ReservationRecord",

    # Review
    "ReviewCreate",
    "ReviewRecord",
]
