"""Quote service: proxies a random quote, never fails."""

import httpx
import structlog

logger = structlog.get_logger(__name__)

FALLBACK_QUOTE = {
    "text": "The present moment is the only time over which we have dominion.",
    "author": "Thich Nhat Hanh",
}


async def fetch_quote(url: str, timeout: float = 5.0) -> dict:
    """
    Fetch a random quote from the upstream API as {text, author}.

    Any upstream problem (network error, bad status, unexpected body) yields
    the fallback quote instead.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        return {"text": data["content"], "author": data["author"]}
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("Quote upstream failed, using fallback", error=str(e))
        return dict(FALLBACK_QUOTE)
