"""External API: quote and weather proxies, web search."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from Data.store import RecordStore
from presentation.dependencies import get_settings, get_store, get_web_search
from services import auth_service, quote_service, search_service, weather_service
from services.config import Settings
from services.errors import UpstreamError
from services.search_service import WebSearch

router = APIRouter()


@router.get("/quote")
async def get_quote(settings: Settings = Depends(get_settings)):
    """A random quote; falls back to a fixed one if the upstream is down."""
    return await quote_service.fetch_quote(
        settings.QUOTE_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS
    )


@router.get("/weather")
async def get_weather(
    lat: str | None = Query(None),
    lon: str | None = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Current weather at lat/lon."""
    try:
        return await weather_service.fetch_weather(
            settings.weather_api_key,
            lat,
            lon,
            settings.WEATHER_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
    except UpstreamError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Weather data unavailable", "message": e.message},
        )


@router.get("/search")
async def search(
    q: str = Query(..., min_length=1),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
    searcher: WebSearch = Depends(get_web_search),
    settings: Settings = Depends(get_settings),
):
    """Search the web and record the query in search history."""
    try:
        return search_service.run_search(
            store, searcher, user_id, q, max_results=settings.SEARCH_MAX_RESULTS
        )
    except UpstreamError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Search unavailable", "message": e.message},
        )
