"""Headless-browser rendering for JavaScript-driven pages.

The fetcher only depends on the :class:`Renderer` protocol, so a pooled or
resource-limited implementation can replace :class:`PlaywrightRenderer`
without changing the fetch control flow.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, Sequence, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from careercoach.config import settings
from careercoach.scraper.concurrency import first_completed
from careercoach.scraper.errors import FETCH_FAILED, TIMEOUT, FetchError

logger = logging.getLogger(__name__)

LAUNCH_ARGS: Tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)

# Any of these appearing usually means the job content has been rendered.
WAIT_SELECTORS: Tuple[str, ...] = (
    "article",
    '[role="main"]',
    ".job-description",
    "main",
)


class Renderer(Protocol):
    async def render(self, url: str) -> str:
        """Return the fully rendered HTML of *url*."""
        ...


class PlaywrightRenderer:
    """Launch-per-call Chromium renderer.

    Every call owns its own browser process, which is closed on every exit
    path, including errors raised mid-navigation.
    """

    def __init__(
        self,
        wait_selectors: Sequence[str] = WAIT_SELECTORS,
        navigation_timeout: Optional[float] = None,
        selector_timeout: Optional[float] = None,
    ) -> None:
        self.wait_selectors = tuple(wait_selectors)
        self.navigation_timeout = (
            settings.browser_timeout if navigation_timeout is None else navigation_timeout
        )
        self.selector_timeout = (
            settings.selector_wait_timeout if selector_timeout is None else selector_timeout
        )

    async def render(self, url: str) -> str:
        try:
            async with async_playwright() as pw:
                browser = await pw.chromium.launch(headless=True, args=list(LAUNCH_ARGS))
                try:
                    page = await browser.new_page(
                        viewport={
                            "width": settings.viewport_width,
                            "height": settings.viewport_height,
                        },
                        user_agent=settings.user_agent,
                    )
                    await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=int(self.navigation_timeout * 1000),
                    )
                    await self._wait_for_content(page)
                    return await page.content()
                finally:
                    await browser.close()
        except PlaywrightTimeoutError as exc:
            raise FetchError(
                "Page load timeout. The website may be slow or unreachable.",
                kind=TIMEOUT,
                url=url,
            ) from exc
        except PlaywrightError as exc:
            raise FetchError(
                f"Failed to fetch job posting with browser: {exc.message}",
                kind=FETCH_FAILED,
                url=url,
            ) from exc

    async def _wait_for_content(self, page) -> None:
        """Wait until a content selector appears or the flat delay elapses."""
        timeout_ms = int(self.selector_timeout * 1000)
        waits = [
            page.wait_for_selector(selector, timeout=timeout_ms)
            for selector in self.wait_selectors
        ]
        try:
            await first_completed(*waits, asyncio.sleep(self.selector_timeout))
        except PlaywrightError:
            logger.info("No specific content selectors found, proceeding with full page")
