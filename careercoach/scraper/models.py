"""Data models for the content fetcher."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawPage:
    """The HTML retrieved for a single URL, before any text extraction."""

    url: str
    html: str
    rendered: bool = False


@dataclass
class FetchResult:
    """Cleaned, whitespace-normalised page text ready to embed in a prompt."""

    url: str
    text: str
    title: str = ""
    rendered: bool = False

    @property
    def length(self) -> int:
        return len(self.text)
