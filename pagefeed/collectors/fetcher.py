"""
Page fetcher — one GET per run with httpx.

Transport errors and non-2xx statuses become FetchFailed. No retries here;
callers that want them wrap fetch_page themselves.
"""
import httpx
from loguru import logger

from config.settings import FETCH_TIMEOUT, USER_AGENT
from pagefeed.exceptions import FetchFailed

_HEADERS = {
    "User-Agent":      USER_AGENT,
    "Accept":          "text/html,application/xhtml+xml",
    "Accept-Language": "en-AU,en;q=0.9",
}


async def fetch_page(
    url: str,
    timeout: float = FETCH_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Return the page body as text. Raises FetchFailed."""
    logger.debug(f"[Fetch] GET {url}")
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=_HEADERS,
            transport=transport,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise FetchFailed(url, f"HTTP {status}", status_code=status) from exc
    except httpx.HTTPError as exc:
        raise FetchFailed(url, f"{type(exc).__name__}: {exc}") from exc
