"""Two-tier content fetcher: static HTTP first, headless browser as fallback.

The static ``httpx`` request is cheap and covers most server-rendered job
boards.  Only when it fails, or yields less than
``settings.min_content_length`` characters, is a browser launched to render
the page.  The two tiers always run one after the other, never in parallel.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from careercoach.config import settings
from careercoach.scraper.errors import INSUFFICIENT_CONTENT, FetchError
from careercoach.scraper.extractor import extract_text_from_html
from careercoach.scraper.models import FetchResult, RawPage
from careercoach.scraper.renderer import PlaywrightRenderer, Renderer
from careercoach.scraper.text import extract_title

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


async def fetch_static(url: str) -> RawPage:
    """GET *url* without executing JavaScript.

    Raises:
        httpx.HTTPError: On network failure, timeout or a 4xx/5xx status.
    """
    async with httpx.AsyncClient(
        headers=_default_headers(),
        timeout=settings.static_timeout,
        follow_redirects=True,
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return RawPage(url=url, html=response.text)


async def fetch_rendered(url: str, renderer: Optional[Renderer] = None) -> RawPage:
    """Render *url* in a headless browser and return the final DOM as HTML."""
    renderer = renderer or PlaywrightRenderer()
    html = await renderer.render(url)
    return RawPage(url=url, html=html, rendered=True)


def _to_result(raw: RawPage) -> FetchResult:
    return FetchResult(
        url=raw.url,
        text=extract_text_from_html(raw.html),
        title=extract_title(raw.html),
        rendered=raw.rendered,
    )


async def fetch_content(url: str, renderer: Optional[Renderer] = None) -> FetchResult:
    """Fetch *url* and return its cleaned main text.

    Args:
        url: Page to fetch.
        renderer: Browser renderer used for the fallback tier.  Defaults to
            a fresh :class:`PlaywrightRenderer`.

    Raises:
        FetchError: When neither tier produces at least
            ``settings.min_content_length`` characters, or the browser
            fallback itself fails.
    """
    minimum = settings.min_content_length

    try:
        logger.info("Attempting static HTTP fetch for %s", url)
        result = _to_result(await fetch_static(url))
        if result.length >= minimum:
            logger.info("Fetched %d chars with static HTTP from %s", result.length, url)
            return result
        logger.info(
            "Static fetch of %s yielded only %d chars, rendering in browser",
            url,
            result.length,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Static fetch of %s failed (%s), rendering in browser", url, exc)

    result = _to_result(await fetch_rendered(url, renderer))
    if result.length < minimum:
        raise FetchError(
            "Insufficient content extracted. The page may be access-restricted or empty.",
            kind=INSUFFICIENT_CONTENT,
            url=url,
        )

    logger.info("Fetched %d chars with browser rendering from %s", result.length, url)
    return result
