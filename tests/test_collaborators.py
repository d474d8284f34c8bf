"""Brainstorm assistant, calendar sync and web search."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from ollama import ResponseError

from presentation import create_app
from services.brainstorm_service import (
    BrainstormAssistant,
    CannedBrainstormAssistant,
    OllamaBrainstormAssistant,
    extract_tags,
)
from services.calendar_service import CalendarProvider
from services.errors import UpstreamError
from services.search_service import DuckDuckGoSearch, WebSearch


class FailingAssistant(BrainstormAssistant):
    async def generate(self, prompt, session_type):
        raise UpstreamError("brainstorm", "model offline")


class FailingCalendar(CalendarProvider):
    async def fetch_events(self, connection, day):
        raise UpstreamError("calendar", "token expired")


class HalfBrokenCalendar(CalendarProvider):
    async def fetch_events(self, connection, day):
        return [
            {"title": "Fine", "startTime": "2025-03-01T09:00:00Z",
             "endTime": "2025-03-01T10:00:00Z"},
            {"title": "No times"},
        ]


class FixedSearch(WebSearch):
    engine = "fixed"

    def search(self, query, max_results=5):
        return [
            {"title": "One", "url": "https://one.example", "snippet": "1"},
            {"title": "Two", "url": "https://two.example", "snippet": "2"},
        ][:max_results]


# ---- Brainstorm ------------------------------------------------------------ #

def test_extract_tags():
    assert extract_tags("A Creative MARKETING strategy") == "creative,marketing,strategy"
    assert extract_tags("nothing relevant") == ""


@pytest.mark.asyncio
async def test_canned_assistant_per_session_type():
    assistant = CannedBrainstormAssistant()
    assert (await assistant.generate("x", "analysis")).startswith("**Analysis**")
    summary = await assistant.generate("Quarterly planning notes", "summary")
    assert "Quarterly planning notes" in summary
    assert "more detail" in await assistant.generate("x", "unknown")


@pytest.mark.asyncio
async def test_ollama_assistant_uses_chat():
    client = MagicMock()
    client.chat = AsyncMock(return_value={"message": {"content": "Try a walk."}})
    assistant = OllamaBrainstormAssistant("llama3.2", client=client)

    assert await assistant.generate("ideas for a break", "idea_generation") == "Try a walk."
    kwargs = client.chat.call_args.kwargs
    assert kwargs["model"] == "llama3.2"
    assert kwargs["messages"][-1] == {"role": "user", "content": "ideas for a break"}


@pytest.mark.asyncio
async def test_ollama_errors_become_upstream_errors():
    client = MagicMock()
    client.chat = AsyncMock(side_effect=ResponseError("model not found"))
    assistant = OllamaBrainstormAssistant("missing", client=client)

    with pytest.raises(UpstreamError):
        await assistant.generate("x", "question")


def test_generate_endpoint_stores_session(client):
    response = client.post("/api/brainstorm-sessions/generate", json={
        "prompt": "A creative productivity routine", "sessionType": "question",
    })
    assert response.status_code == 201
    session = response.json()
    assert session["tags"] == "creative,productivity"
    assert session["sessionType"] == "question"
    assert session["isFavorited"] is False
    assert session["response"].startswith("**Answer**")

    stored = client.get("/api/brainstorm-sessions").json()
    assert [s["id"] for s in stored] == [session["id"]]


def test_generate_endpoint_requires_prompt(client):
    response = client.post("/api/brainstorm-sessions/generate", json={"prompt": ""})
    assert response.status_code == 400


def test_generate_endpoint_reports_assistant_failure(settings, store):
    client = TestClient(create_app(settings=settings, store=store,
                                   brainstorm_assistant=FailingAssistant()))
    response = client.post("/api/brainstorm-sessions/generate", json={"prompt": "x"})
    assert response.status_code == 500
    assert response.json()["message"] == "model offline"
    assert client.get("/api/brainstorm-sessions").json() == []


# ---- Calendar -------------------------------------------------------------- #

def _connect(client) -> dict:
    return client.post("/api/calendar-connections", json={
        "provider": "google", "accountName": "me@example.com",
    }).json()


def test_sync_replaces_events(client):
    connection = _connect(client)
    assert connection["eventsCount"] == 0

    synced = client.post(f"/api/calendar-connections/{connection['id']}/sync").json()
    assert synced["eventsCount"] == 3
    assert synced["syncStatus"] == "connected"
    assert synced["lastSync"]

    client.post(f"/api/calendar-connections/{connection['id']}/sync")
    events = client.get("/api/calendar-events",
                        params={"connectionId": connection["id"]}).json()
    assert len(events) == 3
    assert all(e["provider"] == "google" for e in events)
    assert all(e["calendarName"] == "me@example.com" for e in events)
    assert events == sorted(events, key=lambda e: e["startTime"])


def test_sync_keeps_other_connections_events(client):
    first, second = _connect(client), _connect(client)
    client.post(f"/api/calendar-connections/{first['id']}/sync")
    client.post(f"/api/calendar-connections/{second['id']}/sync")
    client.post(f"/api/calendar-connections/{first['id']}/sync")

    assert len(client.get("/api/calendar-events").json()) == 6


def test_sync_unknown_connection(client):
    response = client.post("/api/calendar-connections/nope/sync")
    assert response.status_code == 404
    assert response.json() == {"error": "Calendar connection not found"}


def test_sync_failure_marks_connection(settings, store):
    client = TestClient(create_app(settings=settings, store=store,
                                   calendar_provider=FailingCalendar()))
    connection = _connect(client)

    response = client.post(f"/api/calendar-connections/{connection['id']}/sync")

    assert response.status_code == 500
    assert response.json()["message"] == "token expired"
    stored = client.get("/api/calendar-connections").json()[0]
    assert stored["syncStatus"] == "error"


def test_invalid_provider_events_leave_previous_sync_intact(settings, store):
    good = TestClient(create_app(settings=settings, store=store))
    connection = _connect(good)
    good.post(f"/api/calendar-connections/{connection['id']}/sync")

    broken = TestClient(create_app(settings=settings, store=store,
                                   calendar_provider=HalfBrokenCalendar()))
    response = broken.post(f"/api/calendar-connections/{connection['id']}/sync")

    assert response.status_code == 500
    assert response.json()["error"] == "Calendar sync failed"
    events = broken.get("/api/calendar-events",
                        params={"connectionId": connection["id"]}).json()
    assert len(events) == 3
    assert all(e["title"] != "Fine" for e in events)
    stored = broken.get("/api/calendar-connections").json()[0]
    assert stored["syncStatus"] == "error"
    assert stored["eventsCount"] == 3


# ---- Search ---------------------------------------------------------------- #

def test_search_records_history(client):
    response = client.get("/api/search", params={"q": "python"})
    assert response.status_code == 200
    assert response.json()["results"] == []

    history = client.get("/api/search-history").json()
    assert history[0]["query"] == "python"
    assert history[0]["resultCount"] == 0


def test_search_counts_results(settings, store):
    client = TestClient(create_app(settings=settings, store=store,
                                   web_search=FixedSearch()))
    body = client.get("/api/search", params={"q": "zen"}).json()

    assert [r["title"] for r in body["results"]] == ["One", "Two"]
    assert body["history"]["resultCount"] == 2
    assert body["history"]["searchEngine"] == "fixed"


def test_search_requires_query(client):
    assert client.get("/api/search").status_code == 400


def test_duckduckgo_results_are_normalised():
    with patch("services.search_service.DDGS") as mock_ddgs:
        ddgs = mock_ddgs.return_value.__enter__.return_value
        ddgs.text.return_value = [
            {"title": "FastAPI", "href": "https://fastapi.tiangolo.com",
             "body": "FastAPI framework"},
        ]
        results = DuckDuckGoSearch().search("fastapi", max_results=1)

    assert results == [{"title": "FastAPI", "url": "https://fastapi.tiangolo.com",
                        "snippet": "FastAPI framework"}]
    ddgs.text.assert_called_once_with("fastapi", max_results=1)


def test_duckduckgo_failure_raises_upstream_error():
    with patch("services.search_service.DDGS") as mock_ddgs:
        mock_ddgs.return_value.__enter__.return_value.text.side_effect = RuntimeError("ratelimit")
        with pytest.raises(UpstreamError):
            DuckDuckGoSearch().search("fastapi")
