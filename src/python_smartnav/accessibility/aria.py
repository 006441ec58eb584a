"""
ARIA semantics used by leaf classification and description output.
"""

from __future__ import annotations

from ..constants import (
    ARIA_ROLE_MESSAGES,
    COMPOSITE_ROLES,
    INPUT_TYPE_MESSAGES,
    TAG_ROLE_MESSAGES,
)
from .dom_util import get_role, is_element, local_tag
from .nodes import Node


def is_composite_control(node: Node) -> bool:
    """Check if an element is a composite widget (grid, listbox, menu, tree, ...).

    Composite widgets aggregate sub-controls and must be entered rather than
    read as one unit unless they are focusable themselves.
    """
    return get_role(node) in COMPOSITE_ROLES


def _count_items(node: Node, item_tag: str, item_role: str) -> int:
    """Count direct list items of a list element."""
    count = 0
    for child in node:
        if local_tag(child) == item_tag or get_role(child) == item_role:
            count += 1
    return count


def get_role_text(node: Node) -> str:
    """Get the spoken role of a node, e.g. 'Link', 'Heading 2', 'List with 3 items'.

    Explicit ``role`` attributes win over the element's implicit role.
    Returns '' for text and for elements without an announced role.
    """
    if not is_element(node):
        return ""

    role = get_role(node)
    tag = local_tag(node)

    if role == "heading":
        level = node.get("aria-level")
        return f"Heading {level}" if level and level.isdigit() else "Heading"
    if role == "list":
        return f"List with {_count_items(node, 'li', 'listitem')} items"
    if role in ARIA_ROLE_MESSAGES:
        return ARIA_ROLE_MESSAGES[role]

    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return f"Heading {tag[1]}"
    if tag in ("ul", "ol"):
        return f"List with {_count_items(node, 'li', 'listitem')} items"
    if tag == "a":
        return "Link" if node.get("href") is not None else ""
    if tag == "input":
        input_type = (node.get("type") or "text").lower()
        return INPUT_TYPE_MESSAGES.get(input_type, "Edit text")
    return TAG_ROLE_MESSAGES.get(tag, "")


def get_state(node: Node) -> str:
    """Get the spoken state of a control, e.g. 'checked', 'collapsed', or ''."""
    if not is_element(node):
        return ""

    states = []
    tag = local_tag(node)
    input_type = (node.get("type") or "").lower()
    if tag == "input" and input_type in ("checkbox", "radio"):
        states.append("checked" if node.get("checked") is not None else "not checked")
    elif node.get("aria-checked") in ("true", "false", "mixed"):
        states.append(
            {"true": "checked", "false": "not checked", "mixed": "partially checked"}[
                node.get("aria-checked")
            ]
        )

    expanded = node.get("aria-expanded")
    if expanded == "true":
        states.append("expanded")
    elif expanded == "false":
        states.append("collapsed")

    if node.get("aria-pressed") == "true":
        states.append("pressed")
    if node.get("disabled") is not None or node.get("aria-disabled") == "true":
        states.append("disabled")
    if node.get("required") is not None or node.get("aria-required") == "true":
        states.append("required")
    return " ".join(states)
