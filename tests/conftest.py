import pytest

from app.agent.graph import QuestionPipeline
from tests.fakes import FakeLLM, FakeLogStore, FakeRetriever, PASSAGES


@pytest.fixture
def log_store() -> FakeLogStore:
    return FakeLogStore()


@pytest.fixture
def make_pipeline(log_store: FakeLogStore):
    """Build a QuestionPipeline over fakes; defaults to a fully succeeding stack."""

    def _make(llm: FakeLLM | None = None, retriever: FakeRetriever | None = None, store: FakeLogStore | None = None):
        return QuestionPipeline(
            llm=llm or FakeLLM(["What does Navneet Kumar do for work?", "Navneet builds chatbots 🤖"]),
            retriever=retriever or FakeRetriever(PASSAGES),
            log_store=store or log_store,
        )

    return _make
