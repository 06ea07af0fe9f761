# File: lawtree/engine.py
"""lawtree.engine: one-call entry point for running a crawl."""

from __future__ import annotations

import asyncio
from typing import Optional

from lawtree.config import CrawlerConfig
from lawtree.crawler.crawler import TreeCrawler, VisitObserver
from lawtree.crawler.models import CrawlNode

__all__ = ["crawl"]


async def crawl(
    url: str,
    config: Optional[CrawlerConfig] = None,
    *,
    observer: Optional[VisitObserver] = None,
    cancel: Optional[asyncio.Event] = None,
) -> CrawlNode:
    """
    Crawl the code rooted at *url* inside its own HTTP session.

    Parameters
    ----------
    url : str
        Absolute URL of the root index page.
    config : CrawlerConfig, optional
        Crawl settings; defaults are used when omitted.
    observer : callable, optional
        Called with ``(PageKind, url)`` for every classified page.
    cancel : asyncio.Event, optional
        Setting it aborts the crawl with CrawlCancelledError.

    Returns
    -------
    CrawlNode
        The root node of the complete tree.
    """
    async with TreeCrawler(config or CrawlerConfig(), observer=observer) as crawler:
        return await crawler.crawl(url, cancel=cancel)
