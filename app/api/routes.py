"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter, Depends

from app.agent.graph import QuestionPipeline
from app.api.handlers import get_pipeline, handle_ask
from app.schemas.ask import AskRequest, AskResponse, ErrorResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Question answering backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Ask ---

@router.post(
    "/ask",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["ask"],
    summary="Ask a question",
    description="Send a question; receive a grounded answer or a fixed apology. 400 when the question is missing or blank.",
)
def post_ask(
    body: AskRequest,
    pipeline: QuestionPipeline = Depends(get_pipeline),
):
    logger.info("[api:post_ask] IN  question=%r", body.question)
    return handle_ask(body, pipeline)
