# lawtree/crawler/fetcher.py
"""
Fetcher module: one logical document retrieval with retry/backoff and
rate-limit awareness.
"""
from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession
from bs4 import BeautifulSoup, ParserRejectedMarkup

from lawtree.config import CrawlerConfig
from lawtree.crawler.backoff import ExponentialBackoff, parse_retry_after
from lawtree.errors import (
    FetchError,
    PermanentError,
    RateLimitedError,
    TransientError,
    UnparseableError,
)
from lawtree.logger import logger

SleepT = Callable[[float], Awaitable[None]]


class Fetcher:
    """Fetches and parses HTML documents, retrying transient failures."""

    def __init__(
        self,
        session: ClientSession,
        config: CrawlerConfig,
        *,
        sleep: SleepT = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.config = config
        self._sleep = sleep
        self._clock = clock
        self._slots = asyncio.Semaphore(config.concurrency)

    async def fetch(self, url: str) -> BeautifulSoup:
        """
        Fetch *url* and return the parsed document.

        Raises PermanentError (client error status or a non-HTTP URL) or
        UnparseableError immediately, TransientError or
        RateLimitedError once the retry budget is spent.
        """
        scheme = urlsplit(url).scheme
        if scheme not in ("http", "https"):
            raise PermanentError(url, message=f"Unsupported scheme {scheme!r}")
        policy = self.config.retry
        backoff = ExponentialBackoff(policy)
        started = self._clock()
        attempts = 0
        while True:
            attempts += 1
            try:
                return await self._attempt(url)
            except RateLimitedError as exc:
                error: FetchError = exc
                if exc.retry_after is not None:
                    delay = exc.retry_after
                    backoff.reset()
                else:
                    delay = backoff.next_delay()
            except TransientError as exc:
                error = exc
                delay = backoff.next_delay()

            if self._clock() - started + delay > policy.max_elapsed_time:
                logger.debug("Giving up on %s after %d attempts: %s", url, attempts, error)
                raise error
            logger.debug("Retry %d for %s after %.2f s (%s)", attempts, url, delay, error)
            await self._sleep(delay)

    async def _attempt(self, url: str) -> BeautifulSoup:
        try:
            async with self._slots, self.session.get(url) as resp:
                status = resp.status
                if status == 429:
                    raise RateLimitedError(url, parse_retry_after(resp.headers.get("Retry-After")))
                if 400 <= status < 500:
                    raise PermanentError(url, status)
                if not 200 <= status < 300:
                    raise TransientError(url, f"Unexpected status {status}")
                try:
                    text = await resp.text()
                except (UnicodeDecodeError, LookupError) as exc:
                    raise UnparseableError(url, f"Cannot decode body ({exc})") from exc
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransientError(url, f"{type(exc).__name__}: {exc}") from exc

        try:
            return BeautifulSoup(text, "html.parser")
        except ParserRejectedMarkup as exc:
            raise UnparseableError(url, f"Cannot parse body ({exc})") from exc
