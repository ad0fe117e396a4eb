"""Content extraction: turns raw HTML into prompt-ready plain text.

Extraction is table driven.  ``NOISE_SELECTORS`` lists elements that are
removed before anything else (scripts, chrome, cookie banners);
``CONTENT_SELECTORS`` is tried in order and the first selector whose text
exceeds the length threshold wins.  New site patterns are added by extending
the tables, not by touching the probing loop.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from careercoach.config import settings
from careercoach.scraper.text import normalize_whitespace, truncate

logger = logging.getLogger(__name__)

NOISE_SELECTORS: Tuple[str, ...] = (
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "iframe",
    "noscript",
    ".cookie-banner",
    "#cookie-banner",
    ".cookie-consent",
    "#onetrust-consent-sdk",
)

CONTENT_SELECTORS: Tuple[str, ...] = (
    "article",
    '[role="main"]',
    "main",
    ".job-description",
    ".job-detail",
    ".job-content",
    "#job-description",
    ".description",
    '[data-automation-id="jobPostingDescription"]',  # Workday
    ".jobdetails",  # LinkedIn
    "body",
)


def strip_noise(soup: BeautifulSoup, selectors: Sequence[str] = NOISE_SELECTORS) -> None:
    """Remove every element matching *selectors* from *soup* in place."""
    for selector in selectors:
        for element in soup.select(selector):
            element.decompose()


def select_content(
    soup: BeautifulSoup,
    selectors: Sequence[str] = CONTENT_SELECTORS,
    min_length: Optional[int] = None,
) -> Tuple[str, Optional[str]]:
    """Return ``(text, selector)`` for the first selector yielding enough text.

    When no selector clears *min_length*, the text of the last selector that
    matched anything is returned (normally ``body``), mirroring a best-effort
    read of the whole page.
    """
    threshold = settings.selector_min_length if min_length is None else min_length
    text, used = "", None

    for selector in selectors:
        elements = soup.select(selector)
        if not elements:
            continue
        candidate = normalize_whitespace(
            "\n".join(el.get_text() for el in elements)
        )
        if not candidate:
            continue
        text, used = candidate, selector
        if len(candidate) > threshold:
            break

    return text, used


def extract_text_from_html(
    html: str,
    selectors: Sequence[str] = CONTENT_SELECTORS,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> str:
    """Extract clean, length-capped text from *html*.

    Never raises for odd markup; an unusable page simply yields a short (or
    empty) string and the caller decides whether that is enough.
    """
    limit = settings.max_content_length if max_length is None else max_length

    soup = BeautifulSoup(html or "", "html.parser")
    strip_noise(soup)
    text, used = select_content(soup, selectors, min_length)

    logger.debug("Extracted %d chars using selector %r", len(text), used)
    return truncate(text, limit)
