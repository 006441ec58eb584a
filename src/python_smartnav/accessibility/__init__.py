"""
Accessibility layer over lxml document trees.

This module provides the host capabilities the walkers consume: node
handles for character data, tree and name accessors, ARIA semantics,
structural queries and description records.
"""

from .aria import get_role_text, get_state, is_composite_control
from .description import get_description_from_ancestors
from .dom_util import (
    collapse_whitespace,
    get_ancestors,
    get_name,
    get_unique_ancestors,
    get_value,
    has_content,
    is_attached_to_document,
    is_descendant_of,
    is_descendant_of_node,
    is_leaf_node,
)
from .nodes import Node, TextNode
from .types import CellPosition, NavDescription
from .xpath import eval_xpath, xpath_supported

__all__ = [
    "CellPosition",
    "NavDescription",
    "Node",
    "TextNode",
    "collapse_whitespace",
    "eval_xpath",
    "get_ancestors",
    "get_description_from_ancestors",
    "get_name",
    "get_role_text",
    "get_state",
    "get_unique_ancestors",
    "get_value",
    "has_content",
    "is_attached_to_document",
    "is_composite_control",
    "is_descendant_of",
    "is_descendant_of_node",
    "is_leaf_node",
    "xpath_supported",
]
