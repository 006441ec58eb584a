"""
Document-order traversal between navigation units.

LinearDomWalker is the traversal primitive: it moves a cursor to the next
or previous node with content, descending only through nodes that its leaf
predicate rejects. With the default predicate every text run, image and
form control is its own stop; SmartDomWalker plugs in a predicate that
accepts whole subtrees.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from lxml import etree

from ..accessibility import dom_util
from ..accessibility.nodes import Node

logger = logging.getLogger(__name__)

LeafPredicate = Callable[[Node], bool]


@runtime_checkable
class Traversable(Protocol):
    """A cursor that can step through a document in both directions."""

    current_node: Node | None
    previous_node: Node | None

    def next(self) -> Node | None: ...

    def previous(self) -> Node | None: ...


def _index_of(siblings: list[Node], node: Node) -> int | None:
    """Find a node among its siblings.

    This is a linear scan, so one step through a container with n children
    costs O(n) and reading such a container end to end costs O(n^2).
    """
    for index, sibling in enumerate(siblings):
        if sibling == node:
            return index
    return None


class LinearDomWalker:
    """Walks a document one unit at a time in document order.

    A unit is a node accepted by the leaf predicate and reached by
    descending through rejected nodes. Units without content are skipped.
    A cursor of None sits outside the document: ``next()`` from there
    yields the first unit and ``previous()`` the last. A cursor on a node
    the predicate rejects sits at the start of that subtree.

    Attributes:
        root: Root element of the document
        current_node: Node under the cursor (None outside the document)
        previous_node: Node occupied before the latest move
        current_ancestors: Ancestor chain of current_node, root-most first,
            captured when the cursor was last set

    Example:
        >>> walker = LinearDomWalker(lxml.html.fromstring("<p>Hi <b>there</b></p>"))
        >>> walker.next().text
        'Hi '
        >>> walker.next()
        <TextNode text of <b>: 'there'>
    """

    def __init__(
        self,
        root: etree._Element,
        start: Node | None = None,
        is_leaf: LeafPredicate | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            root: Root element of the document to walk
            start: Initial cursor position (defaults to outside the document)
            is_leaf: Leaf predicate (defaults to the basic leaf test)
        """
        self.root = root
        self.is_leaf = is_leaf or dom_util.is_leaf_node
        self.current_node: Node | None = None
        self.previous_node: Node | None = None
        self.current_ancestors: list[Node] = []
        if start is not None:
            self.set_current_node(start)

    def set_current_node(self, node: Node | None) -> None:
        """Move the cursor to a node and refresh the ancestor cache."""
        self.current_node = node
        self.current_ancestors = dom_util.get_ancestors(node)

    def next(self) -> Node | None:
        """Move to the next unit with content.

        Returns:
            The new current node, or None past the end of the document
        """
        self.previous_node = self.current_node
        return self.next_content_node()

    def previous(self) -> Node | None:
        """Move to the previous unit with content.

        Returns:
            The new current node, or None before the start of the document
        """
        self.previous_node = self.current_node
        return self.prev_content_node()

    def next_content_node(self) -> Node | None:
        """Advance the cursor without recording the previous node."""
        node = self.current_node
        if node is None:
            found = self._first_content_unit(self.root)
        elif not self.is_leaf(node):
            found = self._first_content_unit(node)
            if found is None:
                found = self._next_after(node)
        else:
            found = self._next_after(node)
        self.set_current_node(found)
        return found

    def prev_content_node(self) -> Node | None:
        """Move the cursor back without recording the previous node."""
        node = self.current_node
        if node is None:
            found = self._last_content_unit(self.root)
        else:
            found = self._previous_before(node)
        self.set_current_node(found)
        return found

    def get_unique_ancestors(self) -> list[Node]:
        """Get the ancestors of the current node not shared with the previous node."""
        if self.current_node is None:
            return []
        return dom_util.get_unique_ancestors(self.previous_node, self.current_node)

    def _first_content_unit(self, node: Node) -> Node | None:
        """Get the first unit with content inside a subtree (or the subtree itself)."""
        if self.is_leaf(node):
            return node if dom_util.has_content(node) else None
        for child in dom_util.iter_children(node):
            found = self._first_content_unit(child)
            if found is not None:
                return found
        return None

    def _last_content_unit(self, node: Node) -> Node | None:
        """Get the last unit with content inside a subtree (or the subtree itself)."""
        if self.is_leaf(node):
            return node if dom_util.has_content(node) else None
        for child in reversed(dom_util.iter_children(node)):
            found = self._last_content_unit(child)
            if found is not None:
                return found
        return None

    def _next_after(self, node: Node) -> Node | None:
        """Get the first unit with content following a subtree."""
        current = node
        while current is not None and current is not self.root:
            parent = dom_util.get_parent(current)
            if parent is None:
                break
            siblings = dom_util.iter_children(parent)
            index = _index_of(siblings, current)
            if index is None:
                break
            for sibling in siblings[index + 1 :]:
                found = self._first_content_unit(sibling)
                if found is not None:
                    return found
            current = parent
        return None

    def _previous_before(self, node: Node) -> Node | None:
        """Get the last unit with content preceding a subtree."""
        current = node
        while current is not None and current is not self.root:
            parent = dom_util.get_parent(current)
            if parent is None:
                break
            siblings = dom_util.iter_children(parent)
            index = _index_of(siblings, current)
            if index is None:
                break
            for sibling in reversed(siblings[:index]):
                found = self._last_content_unit(sibling)
                if found is not None:
                    return found
            current = parent
        return None
