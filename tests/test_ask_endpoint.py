"""
Integration tests for POST /ask.

Most tests skip the startup lifespan (TestClient is not used as a context manager)
and override the pipeline dependency with one built over fakes.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.api.handlers import get_pipeline
from app.core.prompts import FAILURE_ANSWER, NO_CONTEXT_ANSWER
from app.main import app
from tests.fakes import FakeLLM, FakeRetriever


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_pipeline(pipeline) -> None:
    app.dependency_overrides[get_pipeline] = lambda: pipeline


def test_ask_returns_answer(client: TestClient, make_pipeline, log_store) -> None:
    use_pipeline(make_pipeline())
    response = client.post("/ask", json={"question": "What does Navneet do?"})
    assert response.status_code == 200
    assert response.json() == {"answer": "Navneet builds chatbots 🤖"}
    assert len(log_store.exchanges) == 1


def test_ask_trims_question_before_pipeline(client: TestClient) -> None:
    pipeline = MagicMock()
    pipeline.process.return_value = "hi there 👋"
    use_pipeline(pipeline)
    response = client.post("/ask", json={"question": "  hello  "})
    assert response.status_code == 200
    pipeline.process.assert_called_once_with("hello")


def test_ask_blank_question_returns_400(client: TestClient) -> None:
    pipeline = MagicMock()
    use_pipeline(pipeline)
    response = client.post("/ask", json={"question": "  "})
    assert response.status_code == 400
    assert response.json() == {"error": "Question is required"}
    pipeline.process.assert_not_called()


@pytest.mark.parametrize("body", [{}, {"question": None}, {"question": 42}])
def test_ask_missing_or_invalid_question_returns_400(client: TestClient, body: dict) -> None:
    pipeline = MagicMock()
    use_pipeline(pipeline)
    response = client.post("/ask", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Question is required"}
    pipeline.process.assert_not_called()


def test_ask_without_body_returns_400(client: TestClient) -> None:
    use_pipeline(MagicMock())
    response = client.post("/ask")
    assert response.status_code == 400
    assert response.json() == {"error": "Question is required"}


def test_ask_no_context_returns_fixed_apology(client: TestClient, make_pipeline, log_store) -> None:
    use_pipeline(make_pipeline(retriever=FakeRetriever([])))
    response = client.post("/ask", json={"question": "What is Navneet's favourite colour?"})
    assert response.status_code == 200
    assert response.json() == {
        "answer": "I'm sorry, I don't know the answer to that. Please email **navneetkumar.learn@gmail.com** for further assistance."
    }
    assert response.json()["answer"] == NO_CONTEXT_ANSWER
    assert log_store.exchanges == []


def test_ask_pipeline_failure_is_still_200(client: TestClient, make_pipeline, log_store) -> None:
    use_pipeline(make_pipeline(llm=FakeLLM(error=RuntimeError("quota exceeded"))))
    response = client.post("/ask", json={"question": "Hello"})
    assert response.status_code == 200
    assert response.json() == {"answer": FAILURE_ANSWER}
    assert log_store.errors[0].error_message == "quota exceeded"


def test_ask_handler_error_returns_500(client: TestClient) -> None:
    pipeline = MagicMock()
    pipeline.process.side_effect = RuntimeError("unexpected")
    use_pipeline(pipeline)
    response = client.post("/ask", json={"question": "Hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_startup_builds_pipeline_once_and_serves_it(make_pipeline, log_store) -> None:
    pipeline = make_pipeline(llm=FakeLLM(["Q?", "A.", "Q?", "A."]))
    try:
        with patch("app.main.build_pipeline", return_value=pipeline) as build:
            with TestClient(app) as started:
                assert app.state.pipeline is pipeline
                first = started.post("/ask", json={"question": "What does Navneet do?"})
                second = started.post("/ask", json={"question": "What does Navneet do?"})
    finally:
        app.state._state.pop("pipeline", None)
    build.assert_called_once_with()
    assert first.json() == {"answer": "A."}
    assert second.json() == {"answer": "A."}
    assert len(log_store.exchanges) == 2


def test_unhandled_error_outside_handler_returns_500(monkeypatch) -> None:
    monkeypatch.delattr(app.state, "pipeline", raising=False)
    app.dependency_overrides.clear()
    response = TestClient(app, raise_server_exceptions=False).post("/ask", json={"question": "Hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
