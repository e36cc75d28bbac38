"""
Task Manager API - Database Module

MongoDB connection management using Motor (async driver).
"""

import logging

import pymongo
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from taskmanager.config import settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the indexes exist."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
        self.db = self.client[settings.MONGODB_DATABASE]
        await self.ensure_indexes()
        logger.info(f"Connected to MongoDB database '{settings.MONGODB_DATABASE}'")

    async def ensure_indexes(self) -> None:
        """Create the unique user indexes and the task listing index."""
        db = self.get_database()
        await db["users"].create_index("username_lower", unique=True)
        await db["users"].create_index("email", unique=True)
        await db["tasks"].create_index(
            [("owner_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]
        )

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


# Singleton database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get the database instance."""
    return database.get_database()
