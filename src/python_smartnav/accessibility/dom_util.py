"""
Tree accessors for lxml documents.

These functions are the host capabilities the walkers build on: child and
ancestor enumeration in document order, accessible name and value
extraction, content tests, the basic (non-smart) leaf test, and the
liveness check used to detect a cursor that has been removed from the
document. Every function accepts either an lxml element or a TextNode.
"""

from __future__ import annotations

import re

from lxml import etree

from ..constants import CONTENT_TAGS, FOCUSABLE_TAGS, IGNORED_TAGS, LEAF_ROLES, LEAF_TAGS
from .nodes import Node, TextNode

_WHITESPACE = re.compile(r"\s+")
_HIDDEN_STYLE = re.compile(r"(display\s*:\s*none|visibility\s*:\s*hidden)", re.IGNORECASE)

# input types whose value is their visible label rather than user data
_BUTTON_INPUT_TYPES = frozenset({"button", "submit", "reset", "image"})
_CHECKED_INPUT_TYPES = frozenset({"checkbox", "radio"})


def is_element(node: Node | None) -> bool:
    """Check if a node is an element (not text, comment or processing instruction)."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def local_tag(node: Node | None) -> str:
    """Get the lowercase element name without namespace, or '' for non-elements."""
    if not is_element(node):
        return ""
    tag = node.tag
    if tag.startswith("{"):
        tag = tag.split("}", 1)[1]
    return tag.lower()


def get_role(node: Node | None) -> str:
    """Get the explicit ARIA role of an element (first token), or ''."""
    if not is_element(node):
        return ""
    tokens = (node.get("role") or "").split()
    return tokens[0].lower() if tokens else ""


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim both ends."""
    return _WHITESPACE.sub(" ", text).strip()


def iter_children(node: Node) -> list[Node]:
    """Get the children of a node in document order.

    Element children are interleaved with TextNode handles for non-empty
    character data. Comments and processing instructions are skipped but
    their tail text is kept. Ignored elements (script, style, ...) are
    dropped entirely.

    Args:
        node: Element or TextNode

    Returns:
        List of child nodes (empty for text)
    """
    if not is_element(node):
        return []

    children: list[Node] = []
    if node.text:
        children.append(TextNode(node))
    for child in node:
        if is_element(child) and local_tag(child) not in IGNORED_TAGS:
            children.append(child)
        if child.tail:
            children.append(TextNode(child, is_tail=True))
    return children


def get_parent(node: Node) -> etree._Element | None:
    """Get the element containing a node."""
    if isinstance(node, TextNode):
        return node.parent
    return node.getparent()


def get_ancestors(node: Node | None) -> list[Node]:
    """Get the ancestor chain of a node.

    Returns:
        Nodes from the root-most ancestor down to and including ``node``;
        empty for None
    """
    ancestors: list[Node] = []
    current = node
    while current is not None:
        ancestors.append(current)
        current = get_parent(current)
    ancestors.reverse()
    return ancestors


def compare_ancestors(first: list[Node], second: list[Node]) -> int:
    """Get the index at which two ancestor chains diverge."""
    index = 0
    while index < len(first) and index < len(second) and first[index] == second[index]:
        index += 1
    return index


def get_unique_ancestors(previous: Node | None, current: Node) -> list[Node]:
    """Get the ancestors of ``current`` that are not shared with ``previous``.

    This is the scope newly entered when moving from ``previous`` to
    ``current``. The result always ends with ``current`` itself, even when
    both nodes are the same.

    Args:
        previous: Node occupied before the move (None at document start)
        current: Node occupied after the move

    Returns:
        Ancestors of ``current`` below the common ancestor, root-most first
    """
    current_ancestors = get_ancestors(current)
    if previous is None:
        return current_ancestors
    divergence = compare_ancestors(get_ancestors(previous), current_ancestors)
    if divergence >= len(current_ancestors):
        return [current]
    return current_ancestors[divergence:]


def find_ancestor(node: Node | None, tag: str) -> etree._Element | None:
    """Find the nearest ancestor (or the node itself) with the given tag."""
    tag = tag.lower()
    current = node
    while current is not None:
        if local_tag(current) == tag:
            return current
        current = get_parent(current)
    return None


def is_descendant_of(node: Node | None, tag: str) -> bool:
    """Check if a node is (inside) an element with the given tag."""
    return find_ancestor(node, tag) is not None


def is_descendant_of_node(node: Node | None, ancestor: Node | None) -> bool:
    """Check if ``node`` is ``ancestor`` or lies inside it."""
    if node is None or ancestor is None:
        return False
    current = node
    while current is not None:
        if current == ancestor:
            return True
        current = get_parent(current)
    return False


def is_attached_to_document(node: Node | None, root: etree._Element) -> bool:
    """Check if a node is still part of the document rooted at ``root``.

    A TextNode is only attached while its slot still holds text.

    Args:
        node: Node to check
        root: Root element of the live document

    Returns:
        True if walking up from the node reaches ``root``
    """
    if node is None:
        return False
    if isinstance(node, TextNode) and not node.text:
        return False
    current = node
    while current is not None:
        if current is root:
            return True
        current = get_parent(current)
    return False


def is_hidden(node: Node) -> bool:
    """Check if an element is hidden from assistive technology."""
    if not is_element(node):
        return False
    if local_tag(node) in IGNORED_TAGS:
        return True
    if node.get("hidden") is not None:
        return True
    if (node.get("aria-hidden") or "").lower() == "true":
        return True
    if local_tag(node) == "input" and (node.get("type") or "").lower() == "hidden":
        return True
    return bool(_HIDDEN_STYLE.search(node.get("style") or ""))


def get_text(node: Node) -> str:
    """Get the visible text of a node's subtree, whitespace untouched."""
    if isinstance(node, TextNode):
        return node.text
    if not is_element(node) or is_hidden(node):
        return ""
    parts = []
    for child in iter_children(node):
        if isinstance(child, TextNode):
            parts.append(child.text)
        elif local_tag(child) == "br":
            parts.append(" ")
        else:
            parts.append(get_text(child))
    return "".join(parts)


def _find_by_id(node: etree._Element, element_id: str) -> etree._Element | None:
    """Find an element by id in the document containing ``node``."""
    matches = node.getroottree().getroot().xpath("//*[@id=$id]", id=element_id)
    return matches[0] if matches else None


def _get_label_text(node: etree._Element) -> str:
    """Get the text of the label associated with a form control."""
    element_id = node.get("id")
    if element_id:
        root = node.getroottree().getroot()
        labels = root.xpath("//label[@for=$id]", id=element_id)
        if labels:
            return collapse_whitespace(get_text(labels[0]))
    label = find_ancestor(node, "label")
    if label is not None:
        return collapse_whitespace(get_text(label))
    return ""


def get_name(node: Node) -> str:
    """Get the accessible name of a node.

    Resolution order: ``aria-labelledby``, ``aria-label``, element-specific
    attributes (``alt``, button values, associated labels), the subtree
    text, then ``title``.

    Args:
        node: Element or TextNode

    Returns:
        The name, possibly empty
    """
    if isinstance(node, TextNode):
        return node.text
    if not is_element(node) or is_hidden(node):
        return ""

    labelledby = node.get("aria-labelledby")
    if labelledby:
        parts = []
        for element_id in labelledby.split():
            target = _find_by_id(node, element_id)
            if target is not None:
                parts.append(get_text(target))
        name = collapse_whitespace(" ".join(parts))
        if name:
            return name

    label = node.get("aria-label")
    if label and label.strip():
        return label

    tag = local_tag(node)
    if tag in ("img", "area"):
        return node.get("alt") or node.get("title") or ""
    if tag == "input":
        input_type = (node.get("type") or "text").lower()
        if input_type in _BUTTON_INPUT_TYPES:
            return node.get("value") or node.get("alt") or input_type.capitalize()
        return _get_label_text(node) or node.get("placeholder") or node.get("title") or ""
    if tag in ("select", "textarea"):
        return _get_label_text(node) or node.get("title") or ""

    text = get_text(node)
    if text.strip():
        return text
    return node.get("title") or ""


def get_value(node: Node) -> str:
    """Get the user-editable value of a form control, '' for anything else."""
    if not is_element(node):
        return ""
    tag = local_tag(node)
    if tag == "input":
        input_type = (node.get("type") or "text").lower()
        if input_type in _BUTTON_INPUT_TYPES or input_type in _CHECKED_INPUT_TYPES:
            return ""
        if input_type == "password":
            return "*" * len(node.get("value") or "")
        return node.get("value") or ""
    if tag == "textarea":
        return node.text or ""
    if tag == "select":
        options = node.xpath(".//option")
        selected = [option for option in options if option.get("selected") is not None]
        if not selected and options:
            selected = options[:1]
        return ", ".join(collapse_whitespace(get_text(option)) for option in selected)
    if node.get("aria-valuetext"):
        return node.get("aria-valuetext")
    if node.get("aria-valuenow"):
        return node.get("aria-valuenow")
    return ""


def get_content_text(node: Node | None) -> str:
    """Get a node's value followed by its name, whitespace collapsed."""
    if node is None:
        return ""
    return collapse_whitespace(get_value(node) + " " + get_name(node))


def has_content(node: Node | None) -> bool:
    """Check if a node has anything worth announcing.

    Text must contain non-whitespace characters; controls, images with a
    non-empty ``alt`` and media always count; other elements count when
    their name or value is not blank.
    """
    if node is None:
        return False
    if isinstance(node, TextNode):
        return bool(node.text.strip())
    if not is_element(node) or is_hidden(node):
        return False

    tag = local_tag(node)
    if tag in CONTENT_TAGS:
        return True
    if tag == "img":
        return node.get("alt") != ""
    if get_role(node) in LEAF_ROLES:
        return True
    return bool(get_content_text(node))


def is_leaf_node(node: Node) -> bool:
    """Basic leaf test: text, hidden subtrees, atomic elements and childless elements."""
    if not is_element(node):
        return True
    if is_hidden(node):
        return True
    if local_tag(node) in LEAF_TAGS:
        return True
    if get_role(node) in LEAF_ROLES:
        return True
    return not iter_children(node)


def is_focusable(node: Node) -> bool:
    """Check if an element can receive keyboard focus."""
    if not is_element(node):
        return False
    tabindex = node.get("tabindex")
    if tabindex is not None:
        try:
            int(tabindex)
            return True
        except ValueError:
            pass
    if node.get("disabled") is not None:
        return False
    tag = local_tag(node)
    if tag in FOCUSABLE_TAGS:
        return True
    if tag in ("a", "area") and node.get("href") is not None:
        return True
    contenteditable = node.get("contenteditable")
    return contenteditable is not None and contenteditable.lower() in ("", "true")
