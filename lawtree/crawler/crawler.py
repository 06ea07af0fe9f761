# === FILE: lawtree/crawler/crawler.py ===
"""
Recursive tree builder: fetch, classify, then recurse into child links or
extract the sections of a leaf table.

The site is assumed to be a strict tree. There is no visited set, so a page
reachable through two links is fetched twice.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional, Tuple
from urllib.parse import urlsplit

from aiohttp import ClientSession, ClientTimeout

from lawtree.config import CrawlerConfig
from lawtree.crawler.classifier import classify
from lawtree.crawler.extractor import element_text, extract
from lawtree.crawler.fetcher import Fetcher
from lawtree.crawler.links import resolve_reference, select_child_links
from lawtree.crawler.models import CrawlNode, IndexNode, PageKind
from lawtree.errors import CrawlCancelledError, FetchError
from lawtree.logger import logger

__all__ = ("TreeCrawler", "VisitObserver", "log_visit")

VisitObserver = Callable[[PageKind, str], None]

NAME_CELL_SELECTOR = "td.name-cell"


def log_visit(kind: PageKind, url: str) -> None:
    """Default observer: one progress line per classified page."""
    logger.info("%-9s %s", kind.value, urlsplit(url).path or "/")


class TreeCrawler:
    """Asynchronous crawler that builds the navigation tree of a code."""

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        observer: Optional[VisitObserver] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.observer: VisitObserver = observer or log_visit
        self.session = session
        self._owns_session = session is None
        self._fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> TreeCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        self._fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, url: str, cancel: Optional[asyncio.Event] = None) -> CrawlNode:
        """
        Crawl the subtree rooted at *url* and return its node.

        Fetch errors of the root page propagate, those of descendants only drop
        the failing child. Setting *cancel* aborts in-flight requests and raises
        CrawlCancelledError; no partial tree is returned.
        """
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info("Starting crawl: %s", url)
        if cancel is None:
            return await self._crawl(url)

        crawl_task = asyncio.create_task(self._crawl(url))
        cancel_task = asyncio.create_task(cancel.wait())
        try:
            await asyncio.wait({crawl_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_task.cancel()
            if not crawl_task.done():
                crawl_task.cancel()
            await asyncio.gather(crawl_task, cancel_task, return_exceptions=True)
        if crawl_task.cancelled():
            logger.warning("Crawl of %s cancelled", url)
            raise CrawlCancelledError(f"Crawl of {url} cancelled")
        return crawl_task.result()

    async def _crawl(self, url: str) -> CrawlNode:
        doc = await self._fetcher.fetch(url)
        kind = classify(doc)
        self.observer(kind, url)
        title = element_text(doc.find("h1"))

        if kind is PageKind.TERMINAL:
            leaves = tuple(extract(cell) for cell in doc.select(NAME_CELL_SELECTOR))
            return IndexNode(title=title, children=leaves)

        # resolve every reference first: a malformed one aborts before any child request
        targets = [resolve_reference(url, a.get("href")) for a in select_child_links(doc)]
        children = await self._crawl_children(targets)
        return IndexNode(title=title, children=children)

    async def _crawl_children(self, targets: list[str]) -> Tuple[CrawlNode, ...]:
        tasks = [asyncio.create_task(self._crawl_child(target)) for target in targets]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        # gather keeps argument order, so children follow the markup
        return tuple(node for node in results if node is not None)

    async def _crawl_child(self, url: str) -> Optional[CrawlNode]:
        try:
            return await self._crawl(url)
        except FetchError as exc:
            logger.warning("Skipping %s: %s", url, exc)
            return None
