"""
LangGraph question pipeline: standalone rewrite → retrieve → (no-context | generate → save).

Orchestration only; the model, retriever and log store are injected. process()
never raises: any failure is logged to the error collection (best effort) and
answered with a fixed apology.
"""

import logging
import traceback
from typing import Literal, Protocol, TypedDict

from langchain_core.prompts import PromptTemplate
from langgraph.graph import END, StateGraph

from app.core.config import CONTEXT_TOP_K
from app.core.prompts import (
    FAILURE_ANSWER,
    NO_CONTEXT_ANSWER,
    load_answer_prompt,
    load_standalone_prompt,
)
from app.schemas.logs import ChatExchange, ErrorEvent

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class PassageRetriever(Protocol):
    def similarity_search(self, query: str, k: int = CONTEXT_TOP_K) -> list[dict]: ...


class LogStore(Protocol):
    def save_exchange(self, exchange: ChatExchange) -> str: ...

    def save_error(self, event: ErrorEvent) -> str: ...


class PipelineState(TypedDict, total=False):
    original_question: str
    standalone_question: str
    context: str
    answer: str


class QuestionPipeline:
    """Answers one question per process() call against the injected collaborators."""

    def __init__(
        self,
        llm: TextGenerator,
        retriever: PassageRetriever,
        log_store: LogStore,
        standalone_prompt: PromptTemplate | None = None,
        answer_prompt: PromptTemplate | None = None,
        top_k: int = CONTEXT_TOP_K,
        no_context_answer: str = NO_CONTEXT_ANSWER,
        failure_answer: str = FAILURE_ANSWER,
    ) -> None:
        self._llm = llm
        self._retriever = retriever
        self._log_store = log_store
        self._standalone_prompt = standalone_prompt if standalone_prompt is not None else load_standalone_prompt()
        self._answer_prompt = answer_prompt if answer_prompt is not None else load_answer_prompt()
        self._top_k = top_k
        self._no_context_answer = no_context_answer
        self._failure_answer = failure_answer
        self._graph = self._build_graph()

    def process(self, original_question: str) -> str:
        logger.info("[pipeline:process] IN  question=%r", original_question)
        try:
            result = self._graph.invoke({"original_question": original_question})
        except Exception as e:
            logger.exception("[pipeline:process] processing error question=%r", original_question)
            self._record_error(original_question, e)
            return self._failure_answer
        answer = result.get("answer", "")
        logger.info("[pipeline:process] OUT answer_len=%d", len(answer))
        return answer

    # --- nodes ---

    def _rewrite_question(self, state: PipelineState) -> dict:
        question = state["original_question"]
        prompt = self._standalone_prompt.format(question=question)
        standalone = self._llm.generate(prompt).strip() or question
        logger.info("[pipeline:rewrite_question] OUT standalone_question=%r", standalone)
        return {"standalone_question": standalone}

    def _retrieve_context(self, state: PipelineState) -> dict:
        passages = self._retriever.similarity_search(state["standalone_question"], k=self._top_k)
        context = "\n\n".join((p.get("text") or "") for p in passages)
        logger.info("[pipeline:retrieve_context] OUT passages=%d context_len=%d", len(passages), len(context))
        return {"context": context}

    def _no_context(self, state: PipelineState) -> dict:
        logger.info("[pipeline:no_context] no context found for %r", state.get("standalone_question"))
        return {"answer": self._no_context_answer}

    def _generate_answer(self, state: PipelineState) -> dict:
        prompt = self._answer_prompt.format(
            context=state["context"],
            question=state["standalone_question"],
        )
        answer = self._llm.generate(prompt).strip()
        logger.info("[pipeline:generate_answer] OUT answer_len=%d", len(answer))
        return {"answer": answer}

    def _save_exchange(self, state: PipelineState) -> dict:
        """Best effort: a failed insert is logged and the answer still goes out."""
        try:
            self._log_store.save_exchange(
                ChatExchange(
                    original_question=state["original_question"],
                    standalone_question=state["standalone_question"],
                    ai_response=state["answer"],
                )
            )
        except Exception:
            logger.exception("[pipeline:save_exchange] MongoDB save error")
        return {"answer": state["answer"]}

    def _route_after_retrieve(self, state: PipelineState) -> Literal["no_context", "generate_answer"]:
        return "generate_answer" if (state.get("context") or "").strip() else "no_context"

    def _record_error(self, original_question: str, error: Exception) -> None:
        try:
            self._log_store.save_error(
                ErrorEvent(
                    error_message=str(error),
                    original_question=original_question,
                    stack_trace="".join(
                        traceback.format_exception(type(error), error, error.__traceback__)
                    ),
                )
            )
            logger.info("[pipeline:record_error] error logged to MongoDB")
        except Exception:
            logger.exception("[pipeline:record_error] failed to save error log")

    def _build_graph(self):
        graph = StateGraph(PipelineState)

        graph.add_node("rewrite_question", self._rewrite_question)
        graph.add_node("retrieve_context", self._retrieve_context)
        graph.add_node("no_context", self._no_context)
        graph.add_node("generate_answer", self._generate_answer)
        graph.add_node("save_exchange", self._save_exchange)

        graph.set_entry_point("rewrite_question")
        graph.add_edge("rewrite_question", "retrieve_context")
        graph.add_conditional_edges(
            "retrieve_context", self._route_after_retrieve, ["no_context", "generate_answer"]
        )
        graph.add_edge("no_context", END)
        graph.add_edge("generate_answer", "save_exchange")
        graph.add_edge("save_exchange", END)

        return graph.compile()
