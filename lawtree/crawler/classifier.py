# lawtree/crawler/classifier.py
"""Index/terminal classification of a fetched document."""
from __future__ import annotations

from bs4 import BeautifulSoup

from lawtree.crawler.models import PageKind

EXPAND_ALL_SELECTOR = "#expand-all-button"


def classify(doc: BeautifulSoup) -> PageKind:
    """
    Return TERMINAL if the page can expand all of its sections in place.

    Such a page already carries the full text of every entry, so its rows are
    extracted directly instead of being fetched one by one.
    """
    if doc.select_one(EXPAND_ALL_SELECTOR) is not None:
        return PageKind.TERMINAL
    return PageKind.INDEX
