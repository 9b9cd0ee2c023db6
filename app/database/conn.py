from datetime import datetime, timezone
from typing import Optional

from bson.codec_options import CodecOptions
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import database_config
from app.utils.logger_utils import logger

# Every datetime read back is UTC-aware, matching what the services write.
CODEC_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current UTC time at BSON precision (milliseconds).

    Values returned straight after a write then match what a later read gives back.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


class MongoConnection:
    """Holds the motor client and the application database for the process."""

    def __init__(self, uri: str, db_name: str, max_pool_size: int = 100, server_selection_timeout_ms: int = 5000):
        self._uri = uri
        self._db_name = db_name
        self._max_pool_size = max_pool_size
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        if self._client is not None:
            return
        self._client = AsyncIOMotorClient(
            self._uri,
            tz_aware=True,
            maxPoolSize=self._max_pool_size,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
        )
        self._db = self._client.get_database(self._db_name, codec_options=CODEC_OPTIONS)
        logger.info(f"Connected to MongoDB database '{self._db_name}'")

    def bind(self, database) -> None:
        """Use an already built database handle (an in-memory one in tests) without a client."""
        self._db = database

    async def close(self):
        if self._client is not None:
            self._client.close()
            logger.info("Disconnected from MongoDB")
        self._client = None
        self._db = None

    @property
    def database(self):
        if self._db is None:
            raise RuntimeError("Database connection is not initialized. Call `connect()` first.")
        return self._db

    @property
    def connected(self) -> bool:
        return self._client is not None


mongo_client = MongoConnection(
    uri=database_config["MONGO_URI"],
    db_name=database_config["DB_NAME"],
)
