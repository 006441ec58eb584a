"""
Core records produced and consumed by the navigation engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NavDescription:
    """One unit of spoken output for a navigation step.

    Records are immutable snapshots; every optional field is an explicit
    empty string rather than missing.

    Attributes:
        context: Scope being entered, e.g. "List with 3 items"
        text: The node's own text or accessible name
        user_value: Value typed or selected by the user in a control
        annotation: Role and state of the node, e.g. "Link" or "Check box checked"

    Example:
        >>> NavDescription(text="Home", annotation="Link").is_empty
        False
    """

    context: str = ""
    text: str = ""
    user_value: str = ""
    annotation: str = ""

    @property
    def is_empty(self) -> bool:
        """Check if every field is blank."""
        return not (self.context or self.text or self.user_value or self.annotation)

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain mapping."""
        return {
            "context": self.context,
            "text": self.text,
            "user_value": self.user_value,
            "annotation": self.annotation,
        }


@dataclass(frozen=True)
class CellPosition:
    """A 0-based (row, column) slot in a table's grid.

    Attributes:
        row: Row index
        col: Column index
    """

    row: int
    col: int

    def offset(self, rows: int = 0, cols: int = 0) -> CellPosition:
        """Get the position shifted by the given number of rows and columns."""
        return CellPosition(self.row + rows, self.col + cols)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
