"""
Structural queries over the document tree.

Leaf classification asks one question of a candidate subtree: does it
contain any breakout element? That question is answered with an XPath
union evaluated by lxml. Character data handles cannot be queried, and a
malformed query disables structural queries for the node it was run on.
"""

from __future__ import annotations

import logging

from lxml import etree

from .nodes import Node, TextNode

logger = logging.getLogger(__name__)


def xpath_supported(node: Node | None = None) -> bool:
    """Check if structural queries can be evaluated against a node.

    Args:
        node: Context node, or None to ask about the backend in general

    Returns:
        True if ``eval_xpath`` can run with ``node`` as context
    """
    if isinstance(node, TextNode):
        return False
    if node is None:
        return hasattr(etree, "XPath")
    return hasattr(node, "xpath")


def eval_xpath(expression: str, node: Node) -> list[etree._Element] | None:
    """Evaluate an XPath expression with ``node`` as context.

    Args:
        expression: XPath expression returning a node-set
        node: Context element

    Returns:
        Matching elements in document order, or None if the query could not
        be evaluated
    """
    if not xpath_supported(node):
        return None
    try:
        result = node.xpath(expression)
    except etree.XPathError as e:
        logger.warning("Structural query failed (%s): %s", e, expression[:80])
        return None
    if not isinstance(result, list):
        return []
    return [item for item in result if isinstance(item, etree._Element)]
