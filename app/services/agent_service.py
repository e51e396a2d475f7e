"""
Agent wiring: build the question pipeline and its long-lived clients.

Responsibility: Read configuration once at startup, construct the MongoDB,
Milvus, embedding and LLM clients, and hand them to QuestionPipeline. Called by
the app lifespan; no HTTP here.
"""

import logging

from app.agent.graph import QuestionPipeline
from app.agent.llm import ChatModel
from app.core.config import ANSWER_PROMPT_PATH, CONTEXT_TOP_K, STANDALONE_PROMPT_PATH
from app.core.log_store import MongoLogStore, get_mongo_client
from app.core.prompts import load_answer_prompt, load_standalone_prompt
from app.services.retrieval_service import MilvusRetriever
from app.services.vector_store import Embedder, get_milvus_client

logger = logging.getLogger(__name__)


def build_pipeline() -> QuestionPipeline:
    log_store = MongoLogStore(get_mongo_client())
    log_store.ping()
    retriever = MilvusRetriever(get_milvus_client(), Embedder())
    llm = ChatModel()
    pipeline = QuestionPipeline(
        llm=llm,
        retriever=retriever,
        log_store=log_store,
        standalone_prompt=load_standalone_prompt(STANDALONE_PROMPT_PATH),
        answer_prompt=load_answer_prompt(ANSWER_PROMPT_PATH),
        top_k=CONTEXT_TOP_K,
    )
    logger.info("[agent_service:build_pipeline] ready provider=%s top_k=%d", llm.provider, CONTEXT_TOP_K)
    return pipeline
