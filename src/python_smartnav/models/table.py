"""
Two-dimensional table model for table navigation.

TraverseTable lays a rectangular grid over an HTML table subtree, resolving
row and column spans so that every grid slot covered by a cell points back
at that cell. It keeps a cell cursor and answers header queries for the
cell under it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lxml import etree

from ..accessibility.dom_util import get_ancestors, get_role, local_tag
from ..accessibility.nodes import Node
from ..accessibility.types import CellPosition

logger = logging.getLogger(__name__)

# Largest spans a browser honours
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534

_ROW_XPATH = (
    "./*[local-name()='tr'] | "
    "./*[local-name()='thead' or local-name()='tbody' or local-name()='tfoot']"
    "/*[local-name()='tr']"
)
_CELL_XPATH = "./*[local-name()='td' or local-name()='th']"


@dataclass
class ShadowCell:
    """A table cell placed on the grid.

    Attributes:
        element: The td/th element
        row: Row of the cell's top-left slot
        col: Column of the cell's top-left slot
        row_span: Number of rows covered
        col_span: Number of columns covered
    """

    element: etree._Element
    row: int
    col: int
    row_span: int = 1
    col_span: int = 1

    @property
    def is_spanned(self) -> bool:
        """Check if the cell covers more than one slot."""
        return self.row_span > 1 or self.col_span > 1

    def covers_row(self, row: int) -> bool:
        """Check if the cell occupies the given row."""
        return self.row <= row < self.row + self.row_span


def _parse_span(element: etree._Element, attribute: str, default: int = 1) -> int:
    """Read a rowspan/colspan attribute, falling back on malformed values."""
    value = element.get(attribute)
    if value is None:
        return default
    try:
        return max(int(value.strip()), 0)
    except ValueError:
        return default


def _as_position(position: CellPosition | tuple[int, int]) -> CellPosition:
    if isinstance(position, CellPosition):
        return position
    row, col = position
    return CellPosition(row, col)


class TraverseTable:
    """Grid view and cell cursor over one table element.

    The grid is derived on first use and memoized. All coordinates are
    0-based; out-of-range or empty slots make moves fail without changing
    the cursor.

    Attributes:
        table: The table element
        current_cell_cursor: Position of the cursor, None before the first move

    Example:
        >>> table = TraverseTable(table_element)
        >>> table.go_to_cell(CellPosition(1, 0))
        True
        >>> table.get_cell().text
        'Cell 1'
    """

    def __init__(self, table: etree._Element) -> None:
        """Initialize the model.

        Args:
            table: The table element to traverse
        """
        self.table = table
        self.current_cell_cursor: CellPosition | None = None
        self._grid: list[list[ShadowCell | None]] | None = None
        self._cells_by_element: dict[etree._Element, ShadowCell] = {}

    @property
    def grid(self) -> list[list[ShadowCell | None]]:
        """The shadow grid, built on first access."""
        if self._grid is None:
            self._grid = self._build_grid()
        return self._grid

    @property
    def row_count(self) -> int:
        """Number of rows in the grid."""
        return len(self.grid)

    @property
    def col_count(self) -> int:
        """Number of columns in the widest grid row."""
        return max((len(row) for row in self.grid), default=0)

    def _build_grid(self) -> list[list[ShadowCell | None]]:
        """Place every cell of the table's own rows on the grid."""
        rows = self.table.xpath(_ROW_XPATH)
        grid: list[list[ShadowCell | None]] = [[] for _ in rows]

        for row_index, row in enumerate(rows):
            col_index = 0
            for element in row.xpath(_CELL_XPATH):
                slots = grid[row_index]
                while col_index < len(slots) and slots[col_index] is not None:
                    col_index += 1

                remaining_rows = len(rows) - row_index
                row_span = _parse_span(element, "rowspan")
                if row_span == 0:
                    row_span = remaining_rows
                row_span = max(1, min(row_span, remaining_rows, MAX_ROWSPAN))
                col_span = max(1, min(_parse_span(element, "colspan"), MAX_COLSPAN))

                cell = ShadowCell(element, row_index, col_index, row_span, col_span)
                self._cells_by_element[element] = cell
                for r in range(row_index, row_index + row_span):
                    target = grid[r]
                    while len(target) < col_index + col_span:
                        target.append(None)
                    for c in range(col_index, col_index + col_span):
                        target[c] = cell
                col_index += col_span

        logger.debug(
            "Built table grid: %d rows, %d columns",
            len(grid),
            max((len(row) for row in grid), default=0),
        )
        return grid

    def _shadow_at(self, position: CellPosition) -> ShadowCell | None:
        """Get the shadow cell at a slot, None if out of range or empty."""
        if position.row < 0 or position.col < 0:
            return None
        if position.row >= self.row_count:
            return None
        row = self.grid[position.row]
        if position.col >= len(row):
            return None
        return row[position.col]

    def go_to_cell(self, position: CellPosition | tuple[int, int]) -> bool:
        """Move the cursor to a slot.

        Args:
            position: Target (row, col), 0-based

        Returns:
            True if a cell occupies the slot; False leaves the cursor unchanged
        """
        position = _as_position(position)
        if self._shadow_at(position) is None:
            return False
        self.current_cell_cursor = position
        return True

    def _last_occupied_col(self, row: int) -> int | None:
        """Get the last column of a row holding a cell, None for an empty row."""
        slots = self.grid[row]
        for col in range(len(slots) - 1, -1, -1):
            if slots[col] is not None:
                return col
        return None

    def go_to_last_cell(self) -> bool:
        """Move to the last occupied slot of the last row that has one."""
        for row in range(self.row_count - 1, -1, -1):
            col = self._last_occupied_col(row)
            if col is not None:
                return self.go_to_cell(CellPosition(row, col))
        return False

    def go_to_row_last_cell(self) -> bool:
        """Move to the last occupied slot of the current row."""
        if self.current_cell_cursor is None:
            return False
        col = self._last_occupied_col(self.current_cell_cursor.row)
        if col is None:
            return False
        return self.go_to_cell(CellPosition(self.current_cell_cursor.row, col))

    def go_to_col_last_cell(self) -> bool:
        """Move to the last row holding a cell in the current column."""
        if self.current_cell_cursor is None:
            return False
        col = self.current_cell_cursor.col
        for row in range(self.row_count - 1, -1, -1):
            if self._shadow_at(CellPosition(row, col)) is not None:
                return self.go_to_cell(CellPosition(row, col))
        return False

    def get_cell(self) -> etree._Element | None:
        """Get the cell element under the cursor."""
        if self.current_cell_cursor is None:
            return None
        return self.get_cell_at(self.current_cell_cursor)

    def get_cell_at(self, position: CellPosition | tuple[int, int]) -> etree._Element | None:
        """Get the cell element covering a slot without moving the cursor."""
        shadow = self._shadow_at(_as_position(position))
        return shadow.element if shadow is not None else None

    def is_spanned(self) -> bool:
        """Check if the cell under the cursor covers more than one slot."""
        if self.current_cell_cursor is None:
            return False
        shadow = self._shadow_at(self.current_cell_cursor)
        return shadow is not None and shadow.is_spanned

    def find_cell_position(self, node: Node | None) -> CellPosition | None:
        """Get the top-left slot of the cell of this table containing a node.

        Cells of nested tables are skipped in favour of the enclosing cell
        that belongs to this table.
        """
        if self._grid is None:
            self._grid = self._build_grid()
        for ancestor in reversed(get_ancestors(node)):
            if ancestor is self.table:
                return None
            shadow = self._cells_by_element.get(ancestor) if local_tag(ancestor) else None
            if shadow is not None:
                return CellPosition(shadow.row, shadow.col)
        return None

    def _header_kind(self, shadow: ShadowCell) -> str | None:
        """Classify a cell as a 'row' header, a 'col' header, or None."""
        element = shadow.element
        role = get_role(element)
        if role == "columnheader":
            return "col"
        if role == "rowheader":
            return "row"
        if local_tag(element) != "th":
            return None

        scope = (element.get("scope") or "").lower()
        if scope in ("col", "colgroup"):
            return "col"
        if scope in ("row", "rowgroup"):
            return "row"

        row = element.getparent()
        if row is not None and local_tag(row.getparent()) == "thead":
            return "col"
        if row is not None and all(local_tag(cell) == "th" for cell in row.xpath(_CELL_XPATH)):
            return "col"
        return "row"

    def _explicit_headers(self, shadow: ShadowCell) -> list[ShadowCell] | None:
        """Resolve a cell's ``headers`` attribute, None if it has none."""
        ids = (shadow.element.get("headers") or "").split()
        if not ids:
            return None
        headers = []
        for header_id in ids:
            for element in self.table.xpath(".//*[@id=$id]", id=header_id):
                header = self._cells_by_element.get(element)
                if header is not None and header not in headers:
                    headers.append(header)
        return headers

    def _get_headers(self, kind: str) -> list[etree._Element]:
        """Get the row or column headers of the cell under the cursor."""
        if self.current_cell_cursor is None:
            return []
        current = self._shadow_at(self.current_cell_cursor)
        if current is None:
            return []

        explicit = self._explicit_headers(current)
        if explicit is not None:
            if kind == "row":
                matched = [h for h in explicit if h.covers_row(current.row)]
            else:
                matched = [h for h in explicit if not h.covers_row(current.row)]
            return [header.element for header in matched]

        position = self.current_cell_cursor
        if kind == "row":
            slots = [CellPosition(position.row, c) for c in range(position.col)]
        else:
            slots = [CellPosition(r, position.col) for r in range(position.row)]
        candidates = [self._shadow_at(slot) for slot in slots]

        headers: list[etree._Element] = []
        for shadow in candidates:
            if shadow is None or shadow is current or shadow.element in headers:
                continue
            if self._header_kind(shadow) == kind:
                headers.append(shadow.element)
        return headers

    def get_cell_row_headers(self) -> list[etree._Element]:
        """Get the row header elements of the cell under the cursor."""
        return self._get_headers("row")

    def get_cell_col_headers(self) -> list[etree._Element]:
        """Get the column header elements of the cell under the cursor."""
        return self._get_headers("col")

    def __repr__(self) -> str:
        return f"<TraverseTable: {self.row_count} rows × {self.col_count} cols>"
