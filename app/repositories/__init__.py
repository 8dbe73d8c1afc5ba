"""
Repository layer for data access operations.
Each repository wraps one injected AsyncSession and issues one statement per operation.
"""

from app.repositories.base import BaseRepository
from app.repositories.query_builder import CompiledQuery, QueryBuilder
from app.repositories.property import PropertyRepository, build_property_search
from app.repositories.reservation import ReservationRepository
from app.repositories.review import ReviewRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CompiledQuery",
    "QueryBuilder",
    "PropertyRepository",
    "build_property_search",
    "ReservationRepository",
    "ReviewRepository",
    "UserRepository"
]
