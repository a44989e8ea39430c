"""
Database configuration with connection pooling and index management.

This module provides:
- A MongoDB connection manager owned by whoever creates it (the FastAPI
  app during its lifespan, or a CLI command)
- Index creation for the pets and adoptions collections
- The ``get_database`` dependency that hands the database to request handlers
"""
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.errors import OperationFailure

from petcare.core.config import settings
from petcare.log.logging import logger


class DatabaseManager:
    """
    Manages a MongoDB connection with connection pooling and index management.
    """

    def __init__(self, uri: str | None = None, database_name: str | None = None):
        self._uri = uri or settings.mongodb
        self._database_name = database_name or settings.mongodb_database
        self._client: AsyncIOMotorClient | None = None
        self._database: AsyncIOMotorDatabase | None = None
        self._indexes_created = False

    @property
    def client(self) -> AsyncIOMotorClient:
        """Get or create the MongoDB client with connection pooling."""
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self._uri,
                maxPoolSize=settings.mongo_max_pool_size,
                minPoolSize=settings.mongo_min_pool_size,
                maxIdleTimeMS=settings.mongo_max_idle_time_ms,
                connectTimeoutMS=settings.mongo_connect_timeout_ms,
                serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
                socketTimeoutMS=settings.mongo_socket_timeout_ms,
                retryWrites=True,
                retryReads=True,
            )
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Get the configured database."""
        if self._database is None:
            self._database = self.client[self._database_name]
        return self._database

    async def create_indexes(self) -> None:
        """
        Create indexes for the pets and adoptions collections.

        Idempotent: indexes are only created once per manager.
        """
        if self._indexes_created:
            return

        try:
            pets_indexes = [
                IndexModel(
                    [("availableForAdoption", ASCENDING), ("adoptionStatus", ASCENDING)],
                    name="idx_adoption_availability",
                ),
                IndexModel(
                    [("featured", DESCENDING), ("createdAt", DESCENDING)],
                    name="idx_featured_created",
                ),
                IndexModel([("species", ASCENDING)], name="idx_species"),
            ]
            await self.database[settings.pets_collection].create_indexes(pets_indexes)
            logger.info("Created indexes for {collection} collection", collection=settings.pets_collection)

            adoptions_indexes = [
                IndexModel([("applicationId", ASCENDING)], name="idx_application_id", unique=True),
                IndexModel([("applicant.email", ASCENDING)], name="idx_applicant_email"),
                IndexModel([("petId", ASCENDING)], name="idx_pet_id"),
                IndexModel([("status", ASCENDING)], name="idx_status"),
                IndexModel([("createdAt", DESCENDING)], name="idx_created_at"),
            ]
            await self.database[settings.adoptions_collection].create_indexes(adoptions_indexes)
            logger.info(
                "Created indexes for {collection} collection",
                collection=settings.adoptions_collection,
            )

            self._indexes_created = True

        except OperationFailure as e:
            logger.error("Failed to create indexes: {error}", error=str(e))
            raise

    async def ping(self) -> bool:
        """
        Check if the database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error("Database ping failed: {error}", error=str(e))
            return False

    async def initialize(self) -> None:
        """
        Verify connectivity and create indexes.

        Raises:
            RuntimeError: If the database cannot be reached.
        """
        logger.info("Initializing database connection...")

        if not await self.ping():
            raise RuntimeError("Failed to connect to database")
        logger.info("Database connection established")

        await self.create_indexes()

    async def close(self) -> None:
        """Close the database connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("Database connection closed")


def get_db_manager(request: Request) -> DatabaseManager:
    """Return the manager attached to the running application."""
    return request.app.state.db_manager


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    """FastAPI dependency providing the MongoDB database for a request."""
    return get_db_manager(request).database
