#!/usr/bin/env python3
"""
Database initialization script.

Creates the documents table in the configured database.
"""

import asyncio
import sys

from quizme.common.logger import app_logger
from quizme.config import get_settings
from quizme.database.init_db import close_database, initialize_database

logger = app_logger.getChild("scripts.init_db")


async def async_main():
    """Initialize the database."""
    settings = get_settings()
    try:
        await initialize_database(
            database_url=settings.DATABASE_URL,
            echo=True,
            pool_size=settings.DB_POOL_SIZE,
        )
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        sys.exit(1)
    finally:
        await close_database()


if __name__ == "__main__":
    asyncio.run(async_main())
