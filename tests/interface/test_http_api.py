"""Tests for the HTTP chat endpoint."""

import pytest
from fastapi.testclient import TestClient

from yarnbot.config.composition import build_answer_query_use_case
from yarnbot.config.settings import AppSettings
from yarnbot.interface.http.api import MAX_MESSAGE_LENGTH, create_app


@pytest.fixture
def client() -> TestClient:
    settings = AppSettings(
        random_seed=1, catalog_path="", translations_path="", telemetry_enabled=False
    )
    return TestClient(create_app(build_answer_query_use_case(settings)))


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_query_returns_reply_topic_suggestions_and_context(client):
    res = client.post("/api/chatbot/query", json={"message": "hi"})
    assert res.status_code == 200
    body = res.json()
    assert body["topic"] == "greeting"
    assert body["response"].startswith("Good ")
    assert isinstance(body["suggestedQuestions"], list)
    assert body["suggestedQuestions"]
    assert body["context"]["messageCount"] == 1
    assert body["context"]["recentTopics"] == ["greeting"]


def test_context_round_trips_between_turns(client):
    first = client.post("/api/chatbot/query", json={"message": "hi"}).json()
    second = client.post(
        "/api/chatbot/query",
        json={"message": "cancle my oredr", "context": first["context"]},
    ).json()
    assert second["topic"] == "cancellation"
    assert second["context"]["messageCount"] == 2
    assert second["context"]["recentTopics"] == ["cancellation", "greeting"]


def test_malformed_context_is_tolerated(client):
    res = client.post(
        "/api/chatbot/query",
        json={"message": "hi", "context": {"recentTopics": "oops", "messageCount": "x"}},
    )
    assert res.status_code == 200
    assert res.json()["context"]["messageCount"] == 1


def test_blank_message_is_rejected(client):
    res = client.post("/api/chatbot/query", json={"message": "   "})
    assert res.status_code == 400


def test_oversized_message_is_rejected(client):
    res = client.post("/api/chatbot/query", json={"message": "a" * (MAX_MESSAGE_LENGTH + 1)})
    assert res.status_code == 422


def test_reset(client):
    first = client.post("/api/chatbot/query", json={"message": "hi"}).json()
    res = client.post("/api/chatbot/reset", json={"context": first["context"]})
    assert res.status_code == 200
    ctx = res.json()["context"]
    assert ctx["messageCount"] == 0
    assert ctx["recentTopics"] == []
    assert ctx["sessionStarted"]
