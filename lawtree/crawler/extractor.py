# lawtree/crawler/extractor.py
"""
Content extraction for terminal (leaf table) sections.
"""
from __future__ import annotations

from typing import Optional

from bs4.element import Tag

from lawtree.crawler.models import LeafNode

TITLE_SELECTOR = ".content-head-text a"
INFO_VALUE_SELECTOR = ".laws-section-info-module:not(.no-print) .value"
BODY_SELECTOR = ".laws-body span p"
NOTICE_SELECTOR = ".laws-notice p"


def element_text(element: Optional[Tag]) -> str:
    return element.get_text().strip() if element is not None else ""


def extract(section: Tag) -> LeafNode:
    """
    Build a LeafNode from one ``td.name-cell`` of a leaf table.

    The info module lists the effective date first and the latest legislative
    action last; with a single value both fields get the same text.
    """
    info = section.select(INFO_VALUE_SELECTOR)
    return LeafNode(
        title=element_text(section.select_one(TITLE_SELECTOR)),
        effective_date=element_text(info[0]) if info else "",
        latest_action=element_text(info[-1]) if info else "",
        body_paragraphs=tuple(element_text(p) for p in section.select(BODY_SELECTOR)),
        footer_notice=element_text(section.select_one(NOTICE_SELECTOR)),
    )
