"""
MongoDB store for chat and error logs.

Collections: chatlogs (one document per answered question) and errorlogs (one
document per failed pipeline run). Insert-only; records are never read back or
updated by the service.
"""

import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.core.config import (
    CHAT_LOG_COLLECTION,
    ERROR_LOG_COLLECTION,
    MONGO_DB_NAME,
    MONGO_TIMEOUT_MS,
    MONGODB_URI,
)
from app.core.errors import ServiceUnavailableError
from app.schemas.logs import ChatExchange, ErrorEvent

logger = logging.getLogger(__name__)


def get_mongo_client(uri: str = MONGODB_URI) -> MongoClient:
    """Create the process-wide MongoDB client. Connection is lazy; see MongoLogStore.ping."""
    if not uri:
        raise ServiceUnavailableError("MONGODB_URI must be set in .env")
    return MongoClient(uri, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)


class MongoLogStore:
    """Writes ChatExchange and ErrorEvent records to their collections."""

    def __init__(
        self,
        client: MongoClient,
        db_name: str = MONGO_DB_NAME,
        chat_collection: str = CHAT_LOG_COLLECTION,
        error_collection: str = ERROR_LOG_COLLECTION,
    ) -> None:
        self._client = client
        db = client[db_name]
        self._chats = db[chat_collection]
        self._errors = db[error_collection]

    def ping(self) -> bool:
        """Check the connection once at startup. Failure is logged, not raised."""
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error("[log_store:ping] MongoDB connection error: %s", e)
            return False
        logger.info("[log_store:ping] Connected to MongoDB")
        return True

    def save_exchange(self, exchange: ChatExchange) -> str:
        result = self._chats.insert_one(exchange.model_dump(by_alias=True))
        logger.info("[log_store:save_exchange] inserted id=%s", result.inserted_id)
        return str(result.inserted_id)

    def save_error(self, event: ErrorEvent) -> str:
        result = self._errors.insert_one(event.model_dump(by_alias=True))
        logger.info("[log_store:save_error] inserted id=%s", result.inserted_id)
        return str(result.inserted_id)
