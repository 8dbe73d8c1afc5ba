"""
Reservation model linking a guest to a property for a date range.
"""

from sqlalchemy import Date, Integer, Index, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from datetime import date


class Reservation(Base):
    """A guest's booking of a property between start_date and end_date."""

    __tablename__ = "reservations"

    start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="First night of the stay"
    )

    end_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Checkout date"
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, property_id={self.property_id}, start_date={self.start_date})>"


# Upcoming reservations for a guest
guest_start_index = Index(
    "idx_reservations_guest_start",
    Reservation.guest_id,
    Reservation.start_date
)
