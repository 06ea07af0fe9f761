# lawtree/report/json_report.py

"""
JSON serialisation of a crawled tree.

The output is the hand-off format for an external renderer.
"""
import json
from pathlib import Path

from lawtree.crawler.models import CrawlNode, node_to_dict


def tree_to_json(node: CrawlNode, *, pretty: bool = False) -> str:
    """Return the JSON text of *node* and its whole subtree."""
    return json.dumps(node_to_dict(node), ensure_ascii=False, indent=2 if pretty else None)


def render_json(node: CrawlNode, output_path: Path | str) -> Path:
    """
    Save the tree rooted at *node* as JSON at *output_path*.

    :param node: root node returned by the crawler
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from lawtree.report.json_report import render_json
    report_path = render_json(tree, 'out/ohio-revised-code.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(node_to_dict(node), f, ensure_ascii=False, indent=2)

    return output
