"""
Search service: web search behind a swappable backend.

Every search is recorded in the user's search history.
"""

from abc import ABC, abstractmethod

import structlog
from ddgs import DDGS

from Data.collections import get_collection
from Data.store import RecordStore
from services import record_service
from services.errors import UpstreamError

logger = structlog.get_logger(__name__)

SEARCH_HISTORY = get_collection("search-history")


class WebSearch(ABC):
    engine: str = "web"

    @abstractmethod
    def search(self, query: str, max_results: int = 5) -> list[dict]:
        """Return results as dicts with 'title', 'url' and 'snippet'."""


class StubWebSearch(WebSearch):
    """Returns no results; history is still recorded."""

    engine = "stub"

    def search(self, query: str, max_results: int = 5) -> list[dict]:
        return []


class DuckDuckGoSearch(WebSearch):
    engine = "duckduckgo"

    def search(self, query: str, max_results: int = 5) -> list[dict]:
        """
        Search the web using DuckDuckGo.
        Raises UpstreamError when the search backend fails.
        """
        try:
            with DDGS() as ddgs:
                results = list(ddgs.text(query, max_results=max_results))
        except Exception as e:
            logger.warning("Web search failed", query=query, error=str(e))
            raise UpstreamError("search", str(e)) from e
        return [
            {
                "title": r.get("title", ""),
                "url": r.get("href", ""),
                "snippet": r.get("body", ""),
            }
            for r in results
        ]


def build_web_search(backend: str) -> WebSearch:
    if backend == "duckduckgo":
        return DuckDuckGoSearch()
    return StubWebSearch()


def run_search(
    store: RecordStore,
    searcher: WebSearch,
    user_id: str,
    query: str,
    max_results: int = 5,
) -> dict:
    """Search, record the query in history, and return both."""
    results = searcher.search(query, max_results)
    entry = record_service.create_record(
        store,
        SEARCH_HISTORY,
        user_id,
        {"query": query, "searchEngine": searcher.engine,
         "resultCount": len(results)},
    )
    return {"query": query, "results": results, "history": entry}
