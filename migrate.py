#!/usr/bin/env python3
"""
Database management script.
Creates and drops tables, resets the development database and creates admin accounts.
"""

import asyncio
import sys
import argparse
import logging
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from nyumba.config import settings
from nyumba.database import AsyncSessionLocal, close_db_connection, create_tables, drop_tables
from nyumba.models.user import AppRole, UserRole
from nyumba.repositories.user import UserRepository
from nyumba.services.seed_catalog import CATALOGS, STANDARD
from nyumba.services.seeding import SeedingService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class DatabaseManager:
    """Table management and bootstrap data for the configured database."""

    async def create_tables(self) -> None:
        await create_tables()

    async def drop_tables(self) -> None:
        await drop_tables()

    async def reset_database(self) -> None:
        """Drop and recreate every table."""
        logger.warning("Resetting database - all data will be lost!")

        if not settings.is_development and not settings.is_testing:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await drop_tables()
        await create_tables()
        logger.info("Database reset completed")

    async def create_admin(self, email: str, password: str, full_name: str) -> None:
        async with AsyncSessionLocal() as session:
            user_repo = UserRepository(session)

            existing = await user_repo.get_by_email(email)
            if existing:
                logger.info(f"Profile {email} already exists, granting the admin role")
                await user_repo.grant_role(existing.id, AppRole.ADMIN)
                return

            admin = await user_repo.create_profile({
                "email": email,
                "password": password,
                "full_name": full_name,
                "user_role": UserRole.ADMIN,
            })
            await user_repo.grant_role(admin.id, AppRole.ADMIN)

            logger.info(f"Admin profile created: {admin.email}")
            logger.warning("Please change the admin password in production!")

    async def seed_demo(self, catalog: str) -> None:
        async with AsyncSessionLocal() as session:
            result = await SeedingService(session).seed(catalog)
        logger.info(result["message"])
        for title, reason in result["details"].items():
            logger.warning(f"Skipped {title}: {reason}")


async def run(args: argparse.Namespace) -> None:
    manager = DatabaseManager()
    try:
        if args.command == "create-tables":
            await manager.create_tables()
        elif args.command == "drop-tables":
            await manager.drop_tables()
        elif args.command == "reset":
            await manager.reset_database()
        elif args.command == "create-admin":
            await manager.create_admin(args.email, args.password, args.name)
        elif args.command == "seed-demo":
            await manager.seed_demo(args.catalog)
    finally:
        await close_db_connection()


def main():
    """Command line interface for database management."""
    parser = argparse.ArgumentParser(description="Nyumba database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")
    subparsers.add_parser("drop-tables", help="Drop all tables (not in production)")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    admin_parser = subparsers.add_parser("create-admin", help="Create an admin profile")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--name", default="System Administrator")

    seed_parser = subparsers.add_parser("seed-demo", help="Seed demo listings with generated photos")
    seed_parser.add_argument("--catalog", choices=sorted(CATALOGS), default=STANDARD)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return

    try:
        asyncio.run(run(args))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
