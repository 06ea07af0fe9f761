# lawtree/crawler/models.py
"""
Data models for the LawTree crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union


class PageKind(str, Enum):
    """Classification of a fetched document."""

    INDEX = "Table"
    TERMINAL = "LeafTable"


@dataclass(frozen=True, slots=True)
class LeafNode:
    """Extracted content of one section of a code."""

    title: str
    effective_date: str
    latest_action: str
    body_paragraphs: Tuple[str, ...] = ()
    footer_notice: str = ""


@dataclass(frozen=True, slots=True)
class IndexNode:
    """Navigational page; children are kept in source-markup order."""

    title: str
    children: Tuple["CrawlNode", ...] = field(default_factory=tuple)


CrawlNode = Union[IndexNode, LeafNode]


def node_to_dict(node: CrawlNode) -> Dict[str, Any]:
    """Convert *node* and its subtree to JSON-compatible dictionaries."""
    if isinstance(node, LeafNode):
        return {
            "type": "leaf",
            "title": node.title,
            "effective_date": node.effective_date,
            "latest_action": node.latest_action,
            "body_paragraphs": list(node.body_paragraphs),
            "footer_notice": node.footer_notice,
        }
    return {
        "type": "index",
        "title": node.title,
        "children": [node_to_dict(child) for child in node.children],
    }
