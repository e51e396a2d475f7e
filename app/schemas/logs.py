"""Records written to the chat-log and error-log collections."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatExchange(BaseModel):
    """One answered question. Stored in the chatlogs collection with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_question: str = Field(..., alias="originalQuestion")
    standalone_question: str = Field(..., alias="standaloneQuestion")
    ai_response: str = Field(..., alias="aiResponse")
    timestamp: datetime = Field(default_factory=_now)


class ErrorEvent(BaseModel):
    """One failed pipeline run. Stored in the errorlogs collection with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error_message: str = Field(..., alias="errorMessage")
    original_question: str = Field(..., alias="originalQuestion")
    stack_trace: str | None = Field(None, alias="stackTrace")
    timestamp: datetime = Field(default_factory=_now)
