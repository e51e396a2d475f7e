"""
API handlers: read request data, call the pipeline, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Validation and exception-to-HTTP
mapping live here so the pipeline stays free of FastAPI/HTTP types.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.agent.graph import QuestionPipeline
from app.schemas.ask import AskRequest, AskResponse, ErrorResponse

logger = logging.getLogger(__name__)

QUESTION_REQUIRED = "Question is required"
INTERNAL_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def get_pipeline(request: Request) -> QuestionPipeline:
    """FastAPI dependency: the pipeline built at startup (overridden in tests)."""
    return request.app.state.pipeline


def handle_ask(body: AskRequest, pipeline: QuestionPipeline) -> AskResponse | JSONResponse:
    """Reject blank questions with 400; otherwise answer. Anything raised here maps to 500."""
    try:
        question = (body.question or "").strip()
        if not question:
            return error_response(400, QUESTION_REQUIRED)
        answer = pipeline.process(question)
        return AskResponse(answer=answer)
    except Exception:
        logger.exception("[api:handle_ask] API error")
        return error_response(500, INTERNAL_ERROR)
