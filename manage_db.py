#!/usr/bin/env python3
"""
Database management script.
Creates, drops, checks and seeds the LightBnB schema.
"""

import asyncio
import sys
import argparse
import logging
from datetime import date, timedelta

from app.config import settings, configure_logging
from app.database import Database
from app.services.listing import ListingService
from app.utils.exceptions import DataAccessError

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"name": "Eva Stanley", "email": "sebastianguerra@ymail.com", "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."},
    {"name": "Louisa Meyer", "email": "jacksonrose@hotmail.com", "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."},
    {"name": "Dominic Parks", "email": "victoriablackwell@outlook.com", "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."},
]

SEED_PROPERTIES = [
    {
        "title": "Speed lamp", "description": "description",
        "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?auto=compress&cs=tinysrgb&h=350",
        "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
        "cost_per_night": 930.61, "parking_spaces": 6, "number_of_bathrooms": 4, "number_of_bedrooms": 8,
        "country": "Canada", "street": "536 Namsub Highway", "city": "Sotboske",
        "province": "Quebec", "post_code": "28142",
    },
    {
        "title": "Blank corner", "description": "description",
        "thumbnail_photo_url": "https://images.pexels.com/photos/2121121/pexels-photo-2121121.jpeg?auto=compress&cs=tinysrgb&h=350",
        "cover_photo_url": "https://images.pexels.com/photos/2121121/pexels-photo-2121121.jpeg",
        "cost_per_night": 85.34, "parking_spaces": 6, "number_of_bathrooms": 6, "number_of_bedrooms": 7,
        "country": "Canada", "street": "651 Nami Road", "city": "Bohbatev",
        "province": "Alberta", "post_code": "83680",
    },
    {
        "title": "Habit mix", "description": "description",
        "thumbnail_photo_url": "https://images.pexels.com/photos/2080018/pexels-photo-2080018.jpeg?auto=compress&cs=tinysrgb&h=350",
        "cover_photo_url": "https://images.pexels.com/photos/2080018/pexels-photo-2080018.jpeg",
        "cost_per_night": 46.08, "parking_spaces": 0, "number_of_bathrooms": 5, "number_of_bedrooms": 6,
        "country": "Canada", "street": "1650 Hejto Center", "city": "Genwezuj",
        "province": "Newfoundland And Labrador", "post_code": "44583",
    },
]


class DatabaseManager:
    """Runs schema and seed commands against one database handle."""

    def __init__(self, database: Database):
        self.database = database

    async def create(self) -> None:
        await self.database.create_tables()

    async def drop(self) -> None:
        if settings.is_production:
            raise RuntimeError("Cannot drop tables in production environment")
        await self.database.drop_tables()

    async def check(self) -> bool:
        return await self.database.check_connection()

    async def seed(self) -> None:
        """Seed the database with a small LightBnB data set."""
        logger.info("Seeding database with initial data")

        async with self.database.session() as session:
            service = ListingService(session)

            if await service.get_user_with_email(SEED_USERS[0]["email"]):
                logger.info("Seed users already exist, skipping seed")
                return

            users = [await service.add_user(user) for user in SEED_USERS]

            today = date.today()
            for offset, (owner, property_data) in enumerate(zip(users, SEED_PROPERTIES)):
                listing = await service.add_property({**property_data, "owner_id": owner.id})

                # Each property gets one past stay with a review and one upcoming stay
                guest = users[(offset + 1) % len(users)]
                past = await service.add_reservation({
                    "property_id": listing.id,
                    "guest_id": guest.id,
                    "start_date": today - timedelta(days=60 + offset),
                    "end_date": today - timedelta(days=55 + offset),
                })
                await service.add_review({
                    "guest_id": guest.id,
                    "property_id": listing.id,
                    "reservation_id": past.id,
                    "rating": 3 + offset % 3,
                    "message": "messages",
                })
                await service.add_reservation({
                    "property_id": listing.id,
                    "guest_id": guest.id,
                    "start_date": today + timedelta(days=30 + offset),
                    "end_date": today + timedelta(days=35 + offset),
                })

        logger.info(f"Database seeded with {len(SEED_USERS)} users and {len(SEED_PROPERTIES)} properties")

    async def reset(self) -> None:
        """Reset the database by dropping, recreating and seeding all tables."""
        logger.warning("Resetting database - all data will be lost!")
        await self.drop()
        await self.create()
        await self.seed()
        logger.info("Database reset completed")


async def run(command: str) -> int:
    async with Database.from_settings() as database:
        manager = DatabaseManager(database)
        if command == "check":
            return 0 if await manager.check() else 1
        await getattr(manager, command)()
    return 0


def main(argv=None) -> int:
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="LightBnB database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")
    subparsers.add_parser("drop", help="Drop all tables")
    subparsers.add_parser("seed", help="Seed database with initial data")
    subparsers.add_parser("check", help="Check database connectivity")
    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed all tables")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return 1

    configure_logging()

    try:
        return asyncio.run(run(args.command))
    except (DataAccessError, RuntimeError) as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
