# lawtree/crawler/links.py
"""
Child link selection and reference resolution for index pages.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from lawtree.errors import MalformedReferenceError

# Citation links open in a new tab or carry a class; only plain anchors lead
# one level deeper in the hierarchy.
CHILD_LINK_SELECTOR = 'td.name-cell a:not([target="_blank"]):not([class])'


def select_child_links(doc: BeautifulSoup) -> List[Tag]:
    """Return the anchors of *doc* that point to child pages, in document order."""
    return doc.select(CHILD_LINK_SELECTOR)


def resolve_reference(base: str, href: object) -> str:
    """
    Resolve *href* against *base* and return the absolute URL.

    Raises MalformedReferenceError for a missing, empty or unparsable reference.
    A well-formed reference to another scheme (``mailto:``) resolves normally;
    fetching it fails for that child only.
    """
    if not isinstance(href, str) or not href.strip():
        raise MalformedReferenceError(base, href if isinstance(href, str) else None)
    raw = href.strip()
    try:
        urlsplit(raw)
        absolute = urljoin(base, raw)
        urlsplit(absolute)
    except ValueError as exc:
        raise MalformedReferenceError(base, raw) from exc
    return absolute
