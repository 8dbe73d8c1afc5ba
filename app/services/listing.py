"""
Listing service: the data-access operations called by the web layer.
Validates incoming records and delegates each operation to a single repository call.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, ValidationError as PydanticValidationError
from app.config import settings
from app.repositories.property import PropertyRepository
from app.repositories.reservation import ReservationRepository
from app.repositories.review import ReviewRepository
from app.repositories.user import UserRepository
from app.schemas.user import UserCreate, UserRecord
from app.schemas.property import PropertyCreate, PropertyRecord, PropertySearchFilters
from app.schemas.reservation import ReservationCreate, ReservationRecord
from app.schemas.review import ReviewCreate, ReviewRecord
from app.utils.exceptions import RecordValidationError
import logging

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def _coerce(schema: Type[SchemaType], data: Union[SchemaType, Dict[str, Any], None], record: str) -> SchemaType:
    """Accept either a schema instance or a plain mapping from the web layer."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as e:
        logger.warning(f"Rejected {record}: {e.error_count()} field error(s)")
        raise RecordValidationError.from_pydantic(record, e) from e


def _limit(limit: Optional[int]) -> int:
    if limit is None:
        return settings.default_result_limit
    if limit < 1:
        raise RecordValidationError("limit must be at least 1", [{"field": "limit", "message": "must be >= 1"}])
    return limit


class ListingService:
    """
    Data-access operations for users, properties and reservations.

    Not-found lookups return None and empty searches return []. Execution
    failures raise RepositoryError with the driver error as its cause.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.reservation_repo = ReservationRepository(db_session)
        self.review_repo = ReviewRepository(db_session)

    # Users

    async def get_user_with_email(self, email: str) -> Optional[UserRecord]:
        """Get a single user given their email, or None."""
        return await self.user_repo.get_by_email(email)

    async def get_user_with_id(self, user_id: int) -> Optional[UserRecord]:
        """Get a single user given their id, or None."""
        return await self.user_repo.get_user(user_id)

    async def add_user(self, user: Union[UserCreate, Dict[str, Any]]) -> UserRecord:
        """
        Add a new user.

        Args:
            user: name, email and password

        Returns:
            The persisted user with its id

        Raises:
            RecordValidationError: If the fields are invalid
            DuplicateResourceError: If the email is already registered
        """
        user_data = _coerce(UserCreate, user, "user")
        return await self.user_repo.create_user(user_data)

    # Reservations

    async def get_all_reservations(self, guest_id: int, limit: Optional[int] = None) -> List[ReservationRecord]:
        """Get a guest's upcoming reservations, soonest first."""
        return await self.reservation_repo.get_upcoming_for_guest(guest_id, _limit(limit))

    async def add_reservation(self, reservation: Union[ReservationCreate, Dict[str, Any]]) -> ReservationRecord:
        """Add a reservation for a guest."""
        reservation_data = _coerce(ReservationCreate, reservation, "reservation")
        return await self.reservation_repo.create_reservation(reservation_data)

    # Properties

    async def get_all_properties(
        self,
        options: Union[PropertySearchFilters, Dict[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> List[PropertyRecord]:
        """
        Get properties matching the search options, cheapest first.

        Args:
            options: city, owner_id, minimum/maximum_price_per_night (major
                units) and minimum_rating; each is optional
            limit: Maximum number of results (default from settings)
        """
        filters = _coerce(PropertySearchFilters, options, "property search")
        return await self.property_repo.search_properties(filters, _limit(limit))

    async def add_property(self, property: Union[PropertyCreate, Dict[str, Any]]) -> PropertyRecord:
        """Add a property. cost_per_night is given in major units."""
        property_data = _coerce(PropertyCreate, property, "property")
        return await self.property_repo.create_property(property_data)

    # Reviews

    async def add_review(self, review: Union[ReviewCreate, Dict[str, Any]]) -> ReviewRecord:
        """Add a review of a property."""
        review_data = _coerce(ReviewCreate, review, "review")
        return await self.review_repo.create_review(review_data)
