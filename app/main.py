# Run from project root: uvicorn app.main:app --reload  (or: python -m app.main)

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.handlers import INTERNAL_ERROR, QUESTION_REQUIRED, error_response
from app.api.routes import router
from app.core.config import CORS_ORIGINS, PORT
from app.services.agent_service import build_pipeline

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.pipeline = await run_in_threadpool(build_pipeline)
    yield


app = FastAPI(title="Question Answering Backend", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("[api] rejected request path=%s errors=%s", request.url.path, exc.errors())
    return error_response(400, QUESTION_REQUIRED)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("[api] unhandled error path=%s", request.url.path, exc_info=exc)
    return error_response(500, INTERNAL_ERROR)


if __name__ == "__main__":
    logger.info("Server starting on port %d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
