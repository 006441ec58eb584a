"""
Node handles for the navigation engine.

lxml stores character data on elements (``.text`` before the first child and
``.tail`` after an element) rather than as separate nodes. Screen-reader
navigation needs to stop on individual runs of text, so TextNode gives each
run an addressable, hashable handle. A node reference is either an lxml
element or a TextNode.
"""

from __future__ import annotations

from dataclasses import dataclass

from lxml import etree


@dataclass(frozen=True, eq=False)
class TextNode:
    """A run of character data owned by an element.

    Attributes:
        owner: The element holding the text
        is_tail: True for the text following ``owner`` (its tail), False for
            the text before the owner's first child
    """

    owner: etree._Element
    is_tail: bool = False

    @property
    def text(self) -> str:
        """Current character data, empty if the slot no longer holds text."""
        value = self.owner.tail if self.is_tail else self.owner.text
        return value or ""

    @property
    def parent(self) -> etree._Element | None:
        """Element containing this text in the tree."""
        if self.is_tail:
            return self.owner.getparent()
        return self.owner

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextNode):
            return self.owner is other.owner and self.is_tail == other.is_tail
        return False

    def __hash__(self) -> int:
        return hash((id(self.owner), self.is_tail))

    def __repr__(self) -> str:
        preview = self.text[:30] + "..." if len(self.text) > 30 else self.text
        slot = "tail" if self.is_tail else "text"
        return f"<TextNode {slot} of <{self.owner.tag}>: {preview!r}>"


Node = etree._Element | TextNode
