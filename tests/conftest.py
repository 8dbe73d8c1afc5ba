"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides database fixtures, test data factories, and common test utilities.
"""

import pytest
import uuid
import os
from typing import AsyncGenerator, List, Optional
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database, engine_options
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository
from app.repositories.reservation import ReservationRepository
from app.repositories.review import ReviewRepository
from app.schemas.user import UserCreate, UserRecord
from app.schemas.property import PropertyCreate, PropertyRecord
from app.schemas.reservation import ReservationCreate
from app.schemas.review import ReviewCreate
from app.services.listing import ListingService


# Test database configuration; point at PostgreSQL with TEST_DATABASE_URL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def today() -> date:
    """Current date as the database sees it (CURRENT_DATE is UTC on SQLite)."""
    return datetime.now(timezone.utc).date()


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Connected database with a fresh schema for each test."""
    db = Database(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))
    await db.connect()
    await db.drop_tables()
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session() as session:
        yield session


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> ReviewRepository:
    """Create a review repository instance."""
    return ReviewRepository(db_session)


# Service fixtures
@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    """Create a listing service instance."""
    return ListingService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        name: str = "Test User",
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, email: str = None, name: str = "Test User") -> UserRecord:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, name=name)
        return await user_repo.create_user(UserCreate(**user_data))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night=100,
        city: str = "Vancouver",
        number_of_bedrooms: int = 2
    ) -> dict:
        """Create property data dictionary. cost_per_night is in major units."""
        return {
            "owner_id": owner_id,
            "title": title,
            "description": "A beautiful test property",
            "thumbnail_photo_url": "https://example.com/thumb.jpg",
            "cover_photo_url": "https://example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": number_of_bedrooms,
            "country": "Canada",
            "street": "123 Main Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> PropertyRecord:
        """Create a test property in the database."""
        property_data = PropertyFactory.create_property_data(owner_id, **kwargs)
        return await property_repo.create_property(PropertyCreate(**property_data))


class ReviewFactory:
    """Factory for reservations with reviews, which is what makes a property searchable."""

    @staticmethod
    async def review_property(
        db_session: AsyncSession,
        property_id: int,
        guest_id: int,
        ratings: List[int],
        start_date: Optional[date] = None
    ) -> None:
        """Create one past reservation and one review per rating."""
        reservation_repo = ReservationRepository(db_session)
        review_repo = ReviewRepository(db_session)
        start = start_date or today() - timedelta(days=30)
        for rating in ratings:
            reservation = await reservation_repo.create_reservation(
                ReservationCreate(
                    property_id=property_id,
                    guest_id=guest_id,
                    start_date=start,
                    end_date=start + timedelta(days=3),
                )
            )
            await review_repo.create_review(
                ReviewCreate(
                    guest_id=guest_id,
                    property_id=property_id,
                    reservation_id=reservation.id,
                    rating=rating,
                    message="Lovely stay",
                )
            )


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> UserRecord:
    """Create a test property owner."""
    return await UserFactory.create_user(user_repository, email="owner@example.com", name="Test Owner")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> UserRecord:
    """Create a test guest."""
    return await UserFactory.create_user(user_repository, email="guest@example.com", name="Test Guest")


@pytest.fixture
async def reviewed_properties(
    db_session: AsyncSession,
    property_repository: PropertyRepository,
    test_owner: UserRecord,
    test_guest: UserRecord
) -> List[PropertyRecord]:
    """
    Four reviewed properties:
    Vancouver $45 avg 3.0, Toronto $120 avg 4.5, North Vancouver $60 avg 5.0, Calgary $250 avg 2.0.
    """
    specs = [
        ("Cozy Loft", 45, "Vancouver", [3]),
        ("Lake House", 120, "Toronto", [4, 5]),
        ("Harbour View", 60, "North Vancouver", [5, 5]),
        ("Downtown Suite", 250, "Calgary", [2]),
    ]
    created = []
    for title, cost, city, ratings in specs:
        listing = await PropertyFactory.create_property(
            property_repository, test_owner.id, title=title, cost_per_night=cost, city=city
        )
        await ReviewFactory.review_property(db_session, listing.id, test_guest.id, ratings)
        created.append(listing)
    return created
