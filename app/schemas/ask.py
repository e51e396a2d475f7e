"""Schemas for the ask endpoint."""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Request body for POST /ask. A missing or blank question is rejected by the handler with 400."""

    question: str | None = Field(None, description="Question about Navneet Kumar.")


class AskResponse(BaseModel):
    """Response for POST /ask. Always carries text, including fallback apologies."""

    answer: str = Field(..., description="Grounded answer or a fixed apology.")

    model_config = {
        "json_schema_extra": {
            "examples": [{"answer": "Navneet is a software developer who loves building chatbots 🤖"}]
        }
    }


class ErrorResponse(BaseModel):
    """Error payload for 400 / 500 responses."""

    error: str
