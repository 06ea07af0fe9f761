"""lawtree.report: JSON hand-off of the crawled tree to a renderer."""

from lawtree.report.json_report import render_json, tree_to_json

__all__ = ["render_json", "tree_to_json"]
