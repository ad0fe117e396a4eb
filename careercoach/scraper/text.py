"""Text normalisation helpers shared by the extractor and the fetcher."""

from __future__ import annotations

import re

TRUNCATION_MARKER = "..."

_WHITESPACE_RUN = re.compile(r"\s+")
_TITLE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)


def _collapse(match: re.Match) -> str:
    return "\n" if "\n" in match.group(0) else " "


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs and trim.

    A run containing a line break becomes a single ``\\n``; any other run
    becomes a single space.  Applying the function twice is a no-op.
    """
    return _WHITESPACE_RUN.sub(_collapse, text).strip()


def truncate(text: str, limit: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cap *text* at *limit* characters, appending *marker* when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker


def extract_title(html: str) -> str:
    """Return the text content of the first ``<title>`` tag, or empty string."""
    match = _TITLE.search(html)
    if match:
        return normalize_whitespace(match.group(1))
    return ""
