# lawtree/__init__.py
"""
LawTree package initializer.
Defines package version and exposes the crawl API.
"""
__version__ = "0.1.0"

from lawtree.config import CrawlerConfig, RetryPolicy, load_config
from lawtree.crawler.crawler import TreeCrawler
from lawtree.crawler.models import CrawlNode, IndexNode, LeafNode, PageKind
from lawtree.engine import crawl
from lawtree.errors import (
    CrawlCancelledError,
    CrawlError,
    FetchError,
    MalformedReferenceError,
    PermanentError,
    RateLimitedError,
    TransientError,
    UnparseableError,
)

__all__ = [
    "__version__",
    "CrawlCancelledError",
    "CrawlError",
    "CrawlNode",
    "CrawlerConfig",
    "FetchError",
    "IndexNode",
    "LeafNode",
    "MalformedReferenceError",
    "PageKind",
    "PermanentError",
    "RateLimitedError",
    "RetryPolicy",
    "TransientError",
    "TreeCrawler",
    "UnparseableError",
    "crawl",
    "load_config",
]
