"""Async HTTP page fetcher for pasted job URLs."""

import asyncio
from typing import Optional

import httpx

from job_tracker_ai.config import BROWSER_HEADERS, HTTP_MAX_RETRIES, HTTP_TIMEOUT_SECONDS
from job_tracker_ai.services.text_cleaner import clean_page_text
from job_tracker_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def fetch_page(url: str) -> Optional[str]:
    """
    Fetch raw page HTML with browser-like headers. No cookies or authentication.
    Returns None on non-2xx status or network failure; only timeouts and
    connection errors are retried, up to HTTP_MAX_RETRIES attempts in total.
    """
    attempts = max(1, HTTP_MAX_RETRIES)
    last_error: Optional[Exception] = None
    for attempt in range(attempts):
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=HTTP_TIMEOUT_SECONDS,
                headers=BROWSER_HEADERS,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            logger.warning("HTTP error %s for %s", e.response.status_code, url)
            return None
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            last_error = e
            logger.warning("Request failed for %s (attempt %s): %s", url, attempt + 1, str(e))
        except Exception as e:
            logger.warning("Unexpected error fetching %s: %s", url, e)
            return None
        if attempt + 1 < attempts:
            await asyncio.sleep(1.0 * (attempt + 1))  # Backoff

    logger.error("Failed to fetch %s after %s attempts: %s", url, attempts, last_error)
    return None


async def fetch_page_text(url: str) -> str:
    """Fetch a page and return its visible text, bounded in size. Empty string means unusable."""
    html = await fetch_page(url)
    if not html:
        return ""
    text = clean_page_text(html)
    logger.info("Fetched content length: %s chars for URL: %s", len(text), url)
    return text
