"""
FWRCFN Backend — MongoDB Connection Management
================================================

What:  Async MongoDB client, connection state, and the FastAPI dependency
       that hands the database to route handlers.
How:   `mongo.connect()` runs once in the app lifespan: it builds an
       AsyncMongoClient, pings the server, and ensures indexes. A failed
       connect is logged and leaves the state "Disconnected"; the server
       keeps running and data routes answer 500 "Database not connected".
       After startup the state follows the driver's topology: server
       monitors mark the server unknown when heartbeats or operations fail,
       and known again once it answers.
Who:   Route handlers declare `Depends(get_database)`; health routes read
       `mongo.state_label`.

Connection states:
    Disconnected ──connect() ok──▶ Connected ──close()──▶ Disconnected
         ▲                          │     ▲
         │                  server lost   server back
         │                          ▼     │
         │                        Disconnected (client kept)
         └──────────────── connect() failed
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient, monitoring
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from fwrcfn.config import settings
from fwrcfn.exceptions import DatabaseUnavailableError
from fwrcfn.models.user import USERS_COLLECTION

logger = logging.getLogger(__name__)


class TopologyStateLogger(monitoring.TopologyListener):
    """Logs when the deployment stops or starts accepting writes."""

    def opened(self, event: monitoring.TopologyOpenedEvent) -> None:
        logger.debug("MongoDB topology opened")

    def description_changed(self, event: monitoring.TopologyDescriptionChangedEvent) -> None:
        was_up = event.previous_description.has_writable_server()
        is_up = event.new_description.has_writable_server()
        if was_up and not is_up:
            logger.warning("MongoDB connection lost: no writable server reachable")
        elif is_up and not was_up:
            logger.info("MongoDB server reachable")

    def closed(self, event: monitoring.TopologyClosedEvent) -> None:
        logger.debug("MongoDB topology closed")


class MongoConnection:
    """
    Holder for the single MongoDB client of the process.

    The pymongo client owns its connection pool and server monitoring; this
    object records whether the startup handshake succeeded, reads the live
    topology for the current state, and exposes the default database.
    """

    def __init__(self) -> None:
        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        if not self._connected or self._client is None or self._database is None:
            return False
        return bool(self._client.topology_description.has_writable_server())

    @property
    def state_label(self) -> str:
        """Human-readable state reported by the status endpoints."""
        return "Connected" if self.is_connected else "Disconnected"

    @property
    def database(self) -> AsyncDatabase:
        if not self.is_connected:
            raise DatabaseUnavailableError()
        return self._database

    @property
    def database_name(self) -> Optional[str]:
        return self._database.name if self._database is not None else None

    async def connect(self, uri: Optional[str] = None) -> bool:
        """
        Connect to MongoDB and verify the server answers.

        Returns:
            True when connected. False when the server could not be reached;
            the error is logged and not raised.
        """
        uri = uri or settings.mongodb_uri
        logger.info("Attempting to connect to MongoDB...")

        client: Optional[AsyncMongoClient] = None
        try:
            # Malformed URIs raise here (ConfigurationError / InvalidURI)
            client = AsyncMongoClient(
                uri,
                tz_aware=True,
                serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
                event_listeners=[TopologyStateLogger()],
            )
            await client.admin.command("ping")
            database = client.get_default_database(default=settings.mongo_default_db)
            await ensure_indexes(database)
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", str(e))
            logger.error("TIP: Make sure MongoDB is running and MONGODB_URI is correct")
            if client is not None:
                await client.close()
            self._client = None
            self._database = None
            self._connected = False
            return False

        self._client = client
        self._database = database
        self._connected = True
        logger.info("MongoDB connected successfully")
        logger.info("Database: %s", database.name)
        return True

    async def close(self) -> None:
        """Close the client and release pooled connections."""
        if self._client is not None:
            await self._client.close()
        self._client = None
        self._database = None
        self._connected = False


async def ensure_indexes(database: AsyncDatabase) -> None:
    """Create the unique email index (no-op when it already exists)."""
    await database[USERS_COLLECTION].create_index("email", unique=True)


# Process-wide connection holder
mongo = MongoConnection()


# ── Database Dependency ───────────────────────────────────────────────────
async def get_database() -> AsyncDatabase:
    """
    FastAPI dependency returning the connected database.

    Declared on every data-touching route so that the connection check runs
    before the handler body.

    Raises:
        DatabaseUnavailableError: the startup connect failed or no writable
            server is currently reachable (→ 500)
    """
    if not mongo.is_connected:
        raise DatabaseUnavailableError()
    return mongo.database
