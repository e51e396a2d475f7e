"""
Unit tests for MongoLogStore and the log record schemas. The MongoDB client is a MagicMock.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError
from pymongo.errors import ServerSelectionTimeoutError

from app.core.errors import ServiceUnavailableError
from app.core.log_store import MongoLogStore, get_mongo_client
from app.schemas.logs import ChatExchange, ErrorEvent


@pytest.fixture
def mongo() -> MagicMock:
    client = MagicMock()
    client.collections = {"chatlogs": MagicMock(), "errorlogs": MagicMock()}
    client.__getitem__.return_value.__getitem__.side_effect = client.collections.__getitem__
    return client


def collection(mongo: MagicMock, name: str) -> MagicMock:
    return mongo.collections[name]


class TestRecords:
    """Tests for ChatExchange and ErrorEvent."""

    def test_chat_exchange_defaults_timestamp(self) -> None:
        exchange = ChatExchange(original_question="a", standalone_question="b", ai_response="c")
        assert isinstance(exchange.timestamp, datetime)
        assert exchange.timestamp.tzinfo is not None

    def test_chat_exchange_is_immutable(self) -> None:
        exchange = ChatExchange(original_question="a", standalone_question="b", ai_response="c")
        with pytest.raises(ValidationError):
            exchange.ai_response = "changed"

    def test_error_event_requires_message_and_question(self) -> None:
        with pytest.raises(ValidationError):
            ErrorEvent(original_question="q")
        with pytest.raises(ValidationError):
            ErrorEvent(error_message="m")

    def test_error_event_stack_trace_optional(self) -> None:
        assert ErrorEvent(error_message="m", original_question="q").stack_trace is None


class TestMongoLogStore:
    """Tests for MongoLogStore."""

    def test_save_exchange_writes_camel_case_document(self, mongo: MagicMock) -> None:
        chats = collection(mongo, "chatlogs")
        chats.insert_one.return_value.inserted_id = "abc123"
        store = MongoLogStore(mongo, db_name="chatbot")

        inserted = store.save_exchange(
            ChatExchange(original_question="hi", standalone_question="Hello?", ai_response="Hey 👋")
        )

        assert inserted == "abc123"
        doc = chats.insert_one.call_args.args[0]
        assert set(doc) == {"originalQuestion", "standaloneQuestion", "aiResponse", "timestamp"}
        assert doc["aiResponse"] == "Hey 👋"

    def test_save_error_writes_to_error_collection(self, mongo: MagicMock) -> None:
        errors = collection(mongo, "errorlogs")
        store = MongoLogStore(mongo, db_name="chatbot")

        store.save_error(ErrorEvent(error_message="boom", original_question="q", stack_trace="tb"))

        doc = errors.insert_one.call_args.args[0]
        assert doc["errorMessage"] == "boom"
        assert doc["originalQuestion"] == "q"
        assert doc["stackTrace"] == "tb"
        assert "timestamp" in doc
        collection(mongo, "chatlogs").insert_one.assert_not_called()

    def test_insert_failure_propagates(self, mongo: MagicMock) -> None:
        collection(mongo, "chatlogs").insert_one.side_effect = ServerSelectionTimeoutError("down")
        store = MongoLogStore(mongo, db_name="chatbot")
        with pytest.raises(ServerSelectionTimeoutError):
            store.save_exchange(ChatExchange(original_question="a", standalone_question="b", ai_response="c"))

    def test_ping_failure_is_reported_not_raised(self, mongo: MagicMock) -> None:
        mongo.admin.command.side_effect = ServerSelectionTimeoutError("down")
        assert MongoLogStore(mongo).ping() is False

    def test_ping_success(self, mongo: MagicMock) -> None:
        assert MongoLogStore(mongo).ping() is True
        mongo.admin.command.assert_called_once_with("ping")

    def test_missing_uri_is_a_startup_error(self) -> None:
        with pytest.raises(ServiceUnavailableError):
            get_mongo_client("")
