"""
Smart navigation over a document tree.

SmartDomWalker wraps a LinearDomWalker and decides what counts as one
navigation unit: small self-contained subtrees (a paragraph, a cell, a run
of links) are read as a whole, while headings, lists, tables, form
controls and widgets force finer-grained stops. It also owns table mode,
and repairs its cursor when the node under it has been removed from the
document between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lxml import etree

from ..accessibility import dom_util
from ..accessibility.aria import is_composite_control
from ..accessibility.nodes import Node
from ..accessibility.types import CellPosition, NavDescription
from ..accessibility.xpath import eval_xpath, xpath_supported
from ..config import NavigationConfig
from ..models.table import TraverseTable
from .description import DescriptionBuilder
from .linear import LinearDomWalker

logger = logging.getLogger(__name__)

_NESTED_TABLE_XPATH = ".//*[local-name()='table']"


class SmartDomWalker:
    """Walks a document by smart units, with table navigation.

    Table mode is a stack: entering a table pushes a TraverseTable, entering
    a table nested in the current cell pushes another, and exit_table()
    leaves table mode entirely. Every table ever entered stays in ``tables``.
    All table commands return None (or False) when they do not apply.

    Attributes:
        root: Root element of the document
        config: Leaf classification and folding settings
        tables: History of every table model created by this walker
        announce_table: True until the next description announces a newly
            entered table

    Example:
        >>> walker = SmartDomWalker(lxml.html.fromstring(html))
        >>> walker.next()
        <Element h1 at 0x...>
        >>> [d.text for d in walker.get_current_description()]
        ['Quarterly results']
    """

    def __init__(
        self,
        root: etree._Element,
        start: Node | None = None,
        config: NavigationConfig | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            root: Root element of the document to walk
            start: Initial cursor position (defaults to outside the document)
            config: Navigation settings (defaults to NavigationConfig())
        """
        self.root = root
        self.config = config or NavigationConfig()
        self.tables: list[TraverseTable] = []
        self.announce_table = False
        self._table_stack: list[TraverseTable] = []
        self._walker = LinearDomWalker(root, start=start, is_leaf=self.is_leaf_node)
        self._builder = DescriptionBuilder(root, self.config)
        self._capability_gap_logged = False

    # -------------------------------------------------------------------------
    # Cursor state
    # -------------------------------------------------------------------------

    @property
    def current_node(self) -> Node | None:
        """Node under the cursor."""
        return self._walker.current_node

    @property
    def previous_node(self) -> Node | None:
        """Node occupied before the latest move."""
        return self._walker.previous_node

    @property
    def current_ancestors(self) -> list[Node]:
        """Cached ancestor chain of the current node."""
        return self._walker.current_ancestors

    def set_current_node(self, node: Node | None) -> None:
        """Move the cursor to a node without recording a previous node."""
        self._walker.set_current_node(node)

    @property
    def table_mode(self) -> bool:
        """True while a table is being traversed."""
        return bool(self._table_stack)

    @property
    def current_table_navigator(self) -> TraverseTable | None:
        """The innermost table being traversed, None outside table mode."""
        return self._table_stack[-1] if self._table_stack else None

    # -------------------------------------------------------------------------
    # Leaf classification
    # -------------------------------------------------------------------------

    def is_leaf_node(self, node: Node) -> bool:
        """Decide whether a subtree is read as a single navigation unit.

        Rules are checked in order and the first decisive one wins:

        1. A label is a unit only if the basic leaf test accepts it.
        2. Anything the basic leaf test accepts is a unit.
        3. Without structural queries, nothing else is (linear behaviour).
        4. Text longer than ``config.max_charcount`` is too long.
        5. Blank text has nothing to read as a whole.
        6. A breakout descendant with content forces descent.
        7. A composite widget that cannot take focus must be entered.

        Args:
            node: Candidate node

        Returns:
            True if the node is one unit
        """
        if dom_util.local_tag(node) == "label":
            return dom_util.is_leaf_node(node)
        if dom_util.is_leaf_node(node):
            return True
        if not self.config.structural_queries or not xpath_supported(node):
            if not self._capability_gap_logged:
                logger.debug("Structural queries unavailable, falling back to linear navigation")
                self._capability_gap_logged = True
            return False

        content = dom_util.get_content_text(node)
        if len(content) > self.config.max_charcount:
            return False
        if not content.strip():
            return False

        breakout_nodes = eval_xpath(self.config.breakout_xpath, node)
        if breakout_nodes is None:
            return False
        for breakout in breakout_nodes:
            if dom_util.has_content(breakout):
                return False

        if is_composite_control(node) and not dom_util.is_focusable(node):
            return False
        return True

    # -------------------------------------------------------------------------
    # Linear navigation
    # -------------------------------------------------------------------------

    def _is_detached(self) -> bool:
        node = self._walker.current_node
        return node is not None and not dom_util.is_attached_to_document(node, self.root)

    def _recover_detached_cursor(self, forward: bool) -> Node | None:
        """Resume a move from the nearest attached ancestor of a detached cursor.

        The ancestor becomes the cursor, then a compensating pair of moves
        re-enters the document at the ancestor's edge: previous-then-next
        going forward lands on the ancestor's first unit, next-then-previous
        going backward lands on the unit just before it. The second move of
        the pair is the requested move.

        Returns:
            The unit next to the ancestor, or None if no cached ancestor is
            attached any more
        """
        for ancestor in reversed(self._walker.current_ancestors):
            if dom_util.is_attached_to_document(ancestor, self.root):
                logger.debug("Cursor was detached, resuming from %r", ancestor)
                self._walker.set_current_node(ancestor)
                if forward:
                    self._walker.previous()
                    return self._walker.next()
                self._walker.next()
                return self._walker.previous()

        logger.warning("Cursor was detached and none of its ancestors are attached")
        self._walker.previous_node = None
        self._walker.set_current_node(None)
        return None

    def next(self) -> Node | None:
        """Move to the next unit.

        Returns:
            The new current node, or None if there is no further content
        """
        if self._is_detached():
            node = self._recover_detached_cursor(forward=True)
        else:
            node = self._walker.next()
        self._sync_table_cursor()
        return node

    def previous(self) -> Node | None:
        """Move to the previous unit.

        Returns:
            The new current node, or None if there is no earlier content
        """
        if self._is_detached():
            node = self._recover_detached_cursor(forward=False)
        else:
            node = self._walker.previous()
        self._sync_table_cursor()
        return node

    def get_unique_ancestors(self) -> list[Node]:
        """Get the ancestors entered by the latest move."""
        return self._walker.get_unique_ancestors()

    # -------------------------------------------------------------------------
    # Table mode
    # -------------------------------------------------------------------------

    def _push_table(self, table: TraverseTable) -> None:
        """Start traversing a table at the cell holding the cursor (first cell otherwise)."""
        self.tables.append(table)
        self._table_stack.append(table)
        self.announce_table = True

        position = table.find_cell_position(self.current_node)
        if position is None or not table.go_to_cell(position):
            table.go_to_cell(CellPosition(0, 0))
        cell = table.get_cell()
        if cell is not None:
            self._walker.previous_node = self._walker.current_node
            self._walker.set_current_node(cell)
        logger.debug("Entered %r (depth %d)", table, len(self._table_stack))

    def enter_table(self) -> bool:
        """Start table navigation.

        Outside table mode this enters the nearest table containing the
        cursor. In table mode it enters the first table nested in the
        current cell.

        Returns:
            True if a table was entered
        """
        if not self.table_mode:
            table_element = dom_util.find_ancestor(self.current_node, "table")
            if table_element is None:
                return False
            self._push_table(TraverseTable(table_element))
            return True

        cell = self.current_table_navigator.get_cell()
        if cell is None:
            return False
        nested = eval_xpath(_NESTED_TABLE_XPATH, cell)
        if not nested:
            return False
        self._push_table(TraverseTable(nested[0]))
        return True

    def exit_table(self) -> bool:
        """Leave table mode, keeping the table history.

        Returns:
            True if table mode was active
        """
        was_active = self.table_mode
        self._table_stack.clear()
        self.announce_table = False
        return was_active

    def _sync_table_cursor(self) -> None:
        """Follow a linear move with the table cursor while inside the table."""
        table = self.current_table_navigator
        if table is None or self.current_node is None:
            return
        position = table.find_cell_position(self.current_node)
        if position is not None and table.get_cell_at(position) is not table.get_cell():
            table.go_to_cell(position)

    def _move_in_table(self, move: Callable[[TraverseTable], bool]) -> Node | None:
        """Apply a cursor move to the active table and follow it with the walker."""
        table = self.current_table_navigator
        if table is None or not move(table):
            return None
        cell = table.get_cell()
        self._walker.previous_node = self._walker.current_node
        self._walker.set_current_node(cell)
        return cell

    def _move_relative(self, rows: int = 0, cols: int = 0) -> Node | None:
        def move(table: TraverseTable) -> bool:
            cursor = table.current_cell_cursor
            return cursor is not None and table.go_to_cell(cursor.offset(rows, cols))

        return self._move_in_table(move)

    def go_to_first_cell(self) -> Node | None:
        """Move to the first cell of the table."""
        return self._move_in_table(lambda table: table.go_to_cell(CellPosition(0, 0)))

    def go_to_last_cell(self) -> Node | None:
        """Move to the last cell of the table."""
        return self._move_in_table(lambda table: table.go_to_last_cell())

    def go_to_row_first_cell(self) -> Node | None:
        """Move to the first cell of the current row."""

        def move(table: TraverseTable) -> bool:
            cursor = table.current_cell_cursor
            return cursor is not None and table.go_to_cell(CellPosition(cursor.row, 0))

        return self._move_in_table(move)

    def go_to_row_last_cell(self) -> Node | None:
        """Move to the last cell of the current row."""
        return self._move_in_table(lambda table: table.go_to_row_last_cell())

    def go_to_col_first_cell(self) -> Node | None:
        """Move to the first cell of the current column."""

        def move(table: TraverseTable) -> bool:
            cursor = table.current_cell_cursor
            return cursor is not None and table.go_to_cell(CellPosition(0, cursor.col))

        return self._move_in_table(move)

    def go_to_col_last_cell(self) -> Node | None:
        """Move to the last cell of the current column."""
        return self._move_in_table(lambda table: table.go_to_col_last_cell())

    def previous_row(self) -> Node | None:
        """Move to the cell above."""
        return self._move_relative(rows=-1)

    def next_row(self) -> Node | None:
        """Move to the cell below."""
        return self._move_relative(rows=1)

    def previous_col(self) -> Node | None:
        """Move to the cell on the left."""
        return self._move_relative(cols=-1)

    def next_col(self) -> Node | None:
        """Move to the cell on the right."""
        return self._move_relative(cols=1)

    # -------------------------------------------------------------------------
    # Table queries
    # -------------------------------------------------------------------------

    def get_row_header_text(self) -> str:
        """Get the text of the current cell's row headers ('' if none)."""
        table = self.current_table_navigator
        if table is None:
            return ""
        headers = table.get_cell_row_headers()
        return " ".join(filter(None, map(dom_util.get_content_text, headers)))

    def get_col_header_text(self) -> str:
        """Get the text of the current cell's column headers ('' if none)."""
        table = self.current_table_navigator
        if table is None:
            return ""
        headers = table.get_cell_col_headers()
        return " ".join(filter(None, map(dom_util.get_content_text, headers)))

    def get_row_header_guess(self) -> str:
        """Get the text of the first cell in the current row, a stand-in row header."""
        table = self.current_table_navigator
        if table is None or table.current_cell_cursor is None:
            return ""
        row = table.current_cell_cursor.row
        return dom_util.get_content_text(table.get_cell_at(CellPosition(row, 0)))

    def get_col_header_guess(self) -> str:
        """Get the text of the first cell in the current column, a stand-in column header."""
        table = self.current_table_navigator
        if table is None or table.current_cell_cursor is None:
            return ""
        col = table.current_cell_cursor.col
        return dom_util.get_content_text(table.get_cell_at(CellPosition(0, col)))

    def get_row_index(self) -> int | None:
        """Get the 1-based row of the table cursor, None outside table mode."""
        table = self.current_table_navigator
        if table is None or table.current_cell_cursor is None:
            return None
        return table.current_cell_cursor.row + 1

    def get_col_index(self) -> int | None:
        """Get the 1-based column of the table cursor, None outside table mode."""
        table = self.current_table_navigator
        if table is None or table.current_cell_cursor is None:
            return None
        return table.current_cell_cursor.col + 1

    def get_row_count(self) -> int | None:
        """Get the number of rows of the active table, None outside table mode."""
        table = self.current_table_navigator
        return table.row_count if table is not None else None

    def get_col_count(self) -> int | None:
        """Get the number of columns of the active table, None outside table mode."""
        table = self.current_table_navigator
        return table.col_count if table is not None else None

    # -------------------------------------------------------------------------
    # Descriptions
    # -------------------------------------------------------------------------

    def is_annotation_collection(self, annotation: str) -> bool:
        """Check if an annotation is announced as a collection instead of per item."""
        return self._builder.is_annotation_collection(annotation)

    def get_current_description(self) -> tuple[NavDescription, ...]:
        """Describe the navigation to the current unit.

        A newly entered table is announced once; later calls omit it.

        Returns:
            Ordered description records
        """
        descriptions = self._builder.build(
            self.current_node,
            self.previous_node,
            table=self.current_table_navigator,
            announce_table=self.announce_table,
        )
        self.announce_table = False
        return descriptions
