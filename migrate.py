#!/usr/bin/env python3
"""
Database management script.
Creates, drops, seeds and resets the schema of the configured database.
"""

import asyncio
import sys
import argparse
import logging

from sqlalchemy import select

from app.config import settings
from app.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
from app.models.user import User, UserType
from app.models.home import Home, PropertyType
from app.models.image import Image

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SEED_ADMIN_EMAIL = "admin@example.com"
SEED_REALTOR_EMAIL = "realtor@example.com"

SEED_HOMES = [
    {
        "address": "12 King Street West",
        "number_of_bedrooms": 3,
        "number_of_bathrooms": 2.5,
        "city": "Toronto",
        "price": 1250000,
        "land_size": 4400,
        "property_type": PropertyType.RESIDENTIAL,
        "images": [
            "https://images.example.com/homes/king-street/front.jpg",
            "https://images.example.com/homes/king-street/kitchen.jpg",
        ],
    },
    {
        "address": "88 Harbour Square, Unit 1204",
        "number_of_bedrooms": 2,
        "number_of_bathrooms": 2,
        "city": "Toronto",
        "price": 689000,
        "land_size": 950,
        "property_type": PropertyType.CONDO,
        "images": ["https://images.example.com/homes/harbour-square/living.jpg"],
    },
    {
        "address": "401 Granville Street",
        "number_of_bedrooms": 1,
        "number_of_bathrooms": 1,
        "city": "Vancouver",
        "price": 559000,
        "land_size": 610,
        "property_type": PropertyType.CONDO,
        "images": [],
    },
]


async def seed_database() -> None:
    """Seed the database with an admin, a realtor and a few listings."""
    logger.info("Seeding database with initial data")

    async with AsyncSessionLocal() as session:
        try:
            result = await session.execute(select(User).where(User.email == SEED_ADMIN_EMAIL))
            if result.scalar_one_or_none():
                logger.info("Seed data already present, skipping")
                return

            admin = User(
                name="System Administrator",
                phone="555-0100",
                email=SEED_ADMIN_EMAIL,
                password=User.hash_password("admin123"),
                user_type=UserType.ADMIN
            )
            realtor = User(
                name="Rita Realtor",
                phone="555-0101",
                email=SEED_REALTOR_EMAIL,
                password=User.hash_password("realtor123"),
                user_type=UserType.REALTOR
            )
            session.add_all([admin, realtor])
            await session.flush()

            for home_data in SEED_HOMES:
                data = dict(home_data)
                urls = data.pop("images")
                home = Home(**data, realtor_id=realtor.id)
                session.add(home)
                await session.flush()
                session.add_all([Image(url=url, home_id=home.id) for url in urls])

            await session.commit()

            logger.info("Database seeded successfully")
            logger.info(f"  Admin:   {SEED_ADMIN_EMAIL} / admin123")
            logger.info(f"  Realtor: {SEED_REALTOR_EMAIL} / realtor123")
            logger.info(f"  Homes:   {len(SEED_HOMES)}")
            logger.warning("Please change the seeded passwords outside development!")
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to seed database: {e}")
            raise


async def reset_database() -> None:
    """Drop, recreate and seed all tables."""
    logger.warning("Resetting database - all data will be lost!")

    await drop_tables()
    await create_tables()
    await seed_database()

    logger.info("Database reset completed")


async def run_command(command: str) -> None:
    try:
        if command == "create":
            await create_tables()
        elif command == "drop":
            await drop_tables()
        elif command == "seed":
            await seed_database()
        elif command == "reset":
            await reset_database()
    finally:
        await close_db_connection()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description=f"Database management for {settings.app_name}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")
    subparsers.add_parser("drop", help="Drop all tables (development/testing only)")
    subparsers.add_parser("seed", help="Seed database with initial data")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development/testing only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return

    try:
        asyncio.run(run_command(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
