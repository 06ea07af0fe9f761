"""
lawtree.crawler: fetching, classification, extraction and tree building.
"""
from lawtree.crawler.classifier import classify
from lawtree.crawler.crawler import TreeCrawler, VisitObserver, log_visit
from lawtree.crawler.extractor import extract
from lawtree.crawler.fetcher import Fetcher
from lawtree.crawler.links import resolve_reference, select_child_links
from lawtree.crawler.models import CrawlNode, IndexNode, LeafNode, PageKind, node_to_dict

__all__ = [
    "CrawlNode",
    "Fetcher",
    "IndexNode",
    "LeafNode",
    "PageKind",
    "TreeCrawler",
    "VisitObserver",
    "classify",
    "extract",
    "log_visit",
    "node_to_dict",
    "resolve_reference",
    "select_child_links",
]
