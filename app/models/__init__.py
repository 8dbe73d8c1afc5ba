"""
Database models for LightBnB.
Includes User, Property, Reservation and PropertyReview tables.
"""

from app.models.user import User
from app.models.property import Property
from app.models.reservation import Reservation
from app.models.review import PropertyReview

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "Reservation",
    "PropertyReview",
]
