"""
Reservation repository for guest bookings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.repositories.base import BaseRepository
from app.models.property import Property
from app.models.reservation import Reservation
from app.models.review import PropertyReview
from app.schemas.property import PropertyRecord
from app.schemas.reservation import ReservationCreate, ReservationRecord
from typing import List
import logging

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations and a guest's upcoming stays."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)

    async def create_reservation(self, reservation_data: ReservationCreate) -> ReservationRecord:
        """
        Create a reservation.

        Raises:
            RepositoryError: If the insert fails, e.g. the property or guest does not exist
        """
        reservation = await self.create(reservation_data.model_dump())
        logger.info(
            f"Created reservation {reservation.id} for guest {reservation.guest_id} "
            f"at property {reservation.property_id}"
        )
        return ReservationRecord.model_validate(reservation)

    async def get_upcoming_for_guest(self, guest_id: int, limit: int = DEFAULT_LIMIT) -> List[ReservationRecord]:
        """
        Get a guest's reservations starting after today, soonest first.

        Only reservations on reviewed properties are returned, each with the
        property's average rating.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            Reservation records with their property attached

        Raises:
            RepositoryError: If the query fails
        """
        query = (
            select(
                Reservation.id.label("reservation_id"),
                Reservation.guest_id,
                Reservation.start_date,
                Reservation.end_date,
                *Property.__table__.c,
                func.avg(PropertyReview.rating).label("average_rating"),
            )
            .select_from(Property)
            .join(Reservation, Property.id == Reservation.property_id)
            .join(PropertyReview, Property.id == PropertyReview.property_id)
            .where(
                Reservation.guest_id == guest_id,
                Reservation.start_date > func.current_date(),
            )
            .group_by(Property.id, Reservation.id)
            .order_by(Reservation.start_date)
            .limit(limit)
        )

        result = await self.execute("get reservations for guest", query)

        reservations = []
        for row in result.mappings().all():
            reservations.append(
                ReservationRecord(
                    id=row["reservation_id"],
                    property_id=row["id"],
                    guest_id=row["guest_id"],
                    start_date=row["start_date"],
                    end_date=row["end_date"],
                    property=PropertyRecord.model_validate(dict(row)),
                )
            )

        logger.debug(f"Retrieved {len(reservations)} upcoming reservations for guest {guest_id}")
        return reservations
