"""Errors raised by the content fetcher."""

from __future__ import annotations

TIMEOUT = "timeout"
INSUFFICIENT_CONTENT = "insufficient_content"
FETCH_FAILED = "fetch_failed"


class FetchError(Exception):
    """No viable content could be obtained for a URL.

    ``kind`` distinguishes a page-load timeout, a page that yielded too little
    text (paywall, login wall, empty shell) and any other failure, so callers
    can pick an actionable message for the user.
    """

    def __init__(self, message: str, kind: str = FETCH_FAILED, url: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.url = url

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind!r}, message={self.message!r})"
