# =============================================================================
# lib/mongo_client.py - MongoDB Connection Wrapper
# =============================================================================
# Owns the single AsyncMongoClient used by the application and tracks whether
# the initial connection succeeded.
#
# The connection attempt runs as a background task: the server starts
# accepting requests immediately, and a failed connection is logged rather
# than aborting startup. Handlers that need data access check readiness
# through `database` (raises DatabaseUnavailableError) or `wait_ready()`.
#
# Usage:
#   connection = MongoConnection(settings.MONGODB_URI)
#   connection.start()                  # inside a running event loop
#   posts = connection.database["posts"]
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError

from app.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)

# Used when the connection string doesn't name a database
DEFAULT_DATABASE_NAME = "blog"

ConnectionStatus = Literal["idle", "pending", "connected", "failed"]


class MongoConnection:
    """
    Readiness-tracked MongoDB connection.

    Status moves idle -> pending -> connected | failed and never goes back:
    there is no retry after a failed attempt.
    """

    def __init__(
        self,
        uri: str | None,
        auth_source: str = "admin",
        timeout_ms: int = 10_000,
    ):
        self.uri = uri
        self.auth_source = auth_source
        self.timeout_ms = timeout_ms

        self._client: AsyncMongoClient | None = None
        self._task: asyncio.Task | None = None
        self._status: ConnectionStatus = "idle"
        self._error: Exception | None = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def error(self) -> Exception | None:
        """The exception that made the connection fail, if any."""
        return self._error

    @property
    def is_ready(self) -> bool:
        return self._status == "connected"

    @property
    def client(self) -> AsyncMongoClient:
        if self._client is None or not self.is_ready:
            raise DatabaseUnavailableError()
        return self._client

    @property
    def database(self) -> AsyncDatabase:
        """
        Default database of the connection string.

        Raises:
            DatabaseUnavailableError: If the connection isn't established
        """
        return self.client.get_default_database(default=DEFAULT_DATABASE_NAME)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """
        Schedule the connection attempt without waiting for it.

        Must be called from a running event loop. Calling it again returns
        the task of the first attempt.
        """
        if self._task is None:
            self._status = "pending"
            self._task = asyncio.get_running_loop().create_task(
                self._connect(), name="mongodb-connect"
            )
        return self._task

    async def _connect(self) -> None:
        if not self.uri:
            self._fail(ConfigurationError("MONGODB_URI is not set"))
            return

        client: AsyncMongoClient | None = None
        try:
            client = AsyncMongoClient(
                self.uri,
                authSource=self.auth_source,
                serverSelectionTimeoutMS=self.timeout_ms,
            )
            await client.admin.command("ping")
        except asyncio.CancelledError:
            if client is not None:
                await client.close()
            raise
        except Exception as e:
            # Bad options, DNS/SRV lookups and driver errors all end here
            self._fail(e)
            if client is not None:
                await client.close()
            return

        self._client = client
        self._status = "connected"
        logger.info("MongoDB connected!")

    def _fail(self, error: Exception) -> None:
        self._error = error
        self._status = "failed"
        logger.error(f"Failed to connect to MongoDB: {error}")

    async def wait_ready(self, timeout: float | None = None) -> bool:
        """
        Wait for the connection attempt to finish.

        Returns True if connected. A timeout leaves the attempt running.
        """
        if self._task is None:
            return False
        await asyncio.wait({self._task}, timeout=timeout)
        return self.is_ready

    async def close(self) -> None:
        """Cancel a pending attempt and close the client."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")

    def describe(self) -> dict[str, Any]:
        """Connection state for the readiness endpoint."""
        result: dict[str, Any] = {"status": self._status}
        if self._error is not None:
            result["error"] = str(self._error)[:100]
        return result
