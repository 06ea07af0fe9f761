"""
Exception hierarchy for the LawTree crawler.

Fetch failures (``FetchError`` subclasses) are recoverable for a child page and
fatal for the root. ``MalformedReferenceError`` and ``CrawlCancelledError`` are
always fatal for the whole crawl.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "CrawlError",
    "FetchError",
    "TransientError",
    "PermanentError",
    "RateLimitedError",
    "UnparseableError",
    "MalformedReferenceError",
    "CrawlCancelledError",
)


class CrawlError(Exception):
    """Base class for every error raised by the crawler."""


class FetchError(CrawlError):
    """Retrieval of a single URL failed."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url


class TransientError(FetchError):
    """Network or server fault; retried until the backoff budget runs out."""


class PermanentError(FetchError):
    """Client error status other than 429, or a URL that cannot be fetched; never retried."""

    def __init__(self, url: str, status: Optional[int] = None, message: Optional[str] = None) -> None:
        super().__init__(url, message or f"HTTP {status}")
        self.status = status


class RateLimitedError(FetchError):
    """HTTP 429. ``retry_after`` holds the server supplied wait, if any."""

    def __init__(self, url: str, retry_after: Optional[float] = None) -> None:
        super().__init__(url, "HTTP 429 Too Many Requests")
        self.retry_after = retry_after


class UnparseableError(FetchError):
    """Response body could not be decoded or parsed as HTML."""


class MalformedReferenceError(CrawlError):
    """A child link could not be resolved against its parent URL."""

    def __init__(self, base: str, href: Optional[str]) -> None:
        super().__init__(f"Cannot resolve reference {href!r} against {base}")
        self.base = base
        self.href = href


class CrawlCancelledError(CrawlError):
    """The crawl was cancelled before the tree was complete."""
