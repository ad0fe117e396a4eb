"""Scraper package: job-posting fetch and content extraction."""

from careercoach.scraper.errors import FetchError
from careercoach.scraper.extractor import extract_text_from_html
from careercoach.scraper.fetcher import fetch_content
from careercoach.scraper.models import FetchResult, RawPage
from careercoach.scraper.renderer import PlaywrightRenderer, Renderer

__all__ = [
    "fetch_content",
    "extract_text_from_html",
    "FetchError",
    "FetchResult",
    "RawPage",
    "PlaywrightRenderer",
    "Renderer",
]
