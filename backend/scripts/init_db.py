#!/usr/bin/env python3
"""
Create the SQL tables and load the sample catalog into an empty database
"""

import argparse
import asyncio
import logging
import sys

from tuca.core.logging_config import configure_logging
from tuca.core.settings import settings
from tuca.db.session import DatabaseManager
from tuca.storage.database import DatabaseStorage

logger = logging.getLogger(__name__)


async def init_database(db_url: str, seed: bool) -> None:
    storage = DatabaseStorage(DatabaseManager(db_url))
    try:
        await storage.initialize(seed=seed)
        health = await storage.health_check()
        logger.info(f"Database status: {health['status']}")

        users = await storage.list_users()
        logger.info(f"Users in database: {len(users)}")
    finally:
        await storage.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the Tuca Noronha database")
    parser.add_argument("--db-url", default=settings.DB_URL, help="Database URL (defaults to DB_URL)")
    parser.add_argument("--no-seed", action="store_true", help="Create tables only")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    try:
        asyncio.run(init_database(args.db_url, seed=not args.no_seed))
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        sys.exit(1)

    logger.info("Database initialized successfully")


if __name__ == "__main__":
    main()
