"""Weather service: current conditions from OpenWeather."""

import math

import httpx
import structlog

from services.errors import UpstreamError

logger = structlog.get_logger(__name__)


def _round(value: float) -> int:
    """Round half up, the way the dashboard displays temperatures."""
    return math.floor(value + 0.5)


def parse_weather(data: dict) -> dict:
    """Map an OpenWeather /weather response to the dashboard's shape."""
    condition = data["weather"][0]
    return {
        "temperature": _round(data["main"]["temp"]),
        "condition": condition["main"],
        "description": condition["description"],
        "location": data["name"],
        "high": _round(data["main"]["temp_max"]),
        "low": _round(data["main"]["temp_min"]),
        "icon": condition["icon"],
    }


async def fetch_weather(
    api_key: str,
    lat: str | None,
    lon: str | None,
    url: str,
    timeout: float = 5.0,
) -> dict:
    """Fetch current weather for the coordinates. Raises UpstreamError."""
    if not api_key:
        raise UpstreamError("weather", "Weather API key not configured")
    if not lat or not lon:
        raise UpstreamError("weather", "Location coordinates required")

    params = {"lat": lat, "lon": lon, "appid": api_key, "units": "metric"}
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Weather upstream failed", error=str(e))
        raise UpstreamError("weather", "Failed to fetch weather data") from e

    try:
        return parse_weather(data)
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning("Unexpected weather payload", error=str(e))
        raise UpstreamError("weather", "Unexpected weather data") from e
