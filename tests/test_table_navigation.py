"""
Tests for table mode on SmartDomWalker.

These tests verify:
- Entering and leaving tables, including nested tables
- The ten cell movement commands and their failure behaviour
- 1-based indexes, dimensions and header queries
- Synchronisation of the table cursor with linear moves
"""

import lxml.html
from lxml import etree

from python_smartnav import SmartDomWalker

SCORES_HTML = """<html><body>
<h1>Scores</h1>
<table id="scores">
<thead><tr><th>Name</th><th>Math</th><th>Art</th></tr></thead>
<tbody>
<tr><th>Ann</th><td id="ann-math">90</td><td>85</td></tr>
<tr><th>Bob</th><td>70</td><td id="bob-art">95</td></tr>
</tbody>
</table>
<p>After the table.</p>
</body></html>"""

PLAIN_HTML = """<html><body>
<table id="plain">
<tr><td>Region</td><td>Sales</td></tr>
<tr><td>North</td><td>10</td></tr>
</table>
</body></html>"""

NESTED_HTML = """<html><body>
<table id="outer">
<tr><td>Left</td><td id="host"><table id="inner">
<tr><td>i1</td><td>i2</td></tr>
<tr><td>i3</td><td>i4</td></tr>
</table></td></tr>
</table>
</body></html>"""

BLOCK_CELLS_HTML = """<html><body>
<table id="blocks">
<tr><td><p>X</p><p>Y</p></td><td>Z</td></tr>
</table>
</body></html>"""


def parse(markup: str) -> etree._Element:
    return lxml.html.document_fromstring(markup)


def by_id(root: etree._Element, element_id: str) -> etree._Element:
    return root.xpath("//*[@id=$id]", id=element_id)[0]


def walker_in_table(markup: str, cell_id: str | None = None, table_id: str = "scores"):
    root = parse(markup)
    start = by_id(root, cell_id) if cell_id else by_id(root, table_id)
    walker = SmartDomWalker(root, start=start)
    assert walker.enter_table()
    return root, walker


def cell_text(node) -> str:
    return node.text_content().strip()


class TestEnterExit:
    """Tests for table mode lifecycle."""

    def test_enter_from_inside_a_cell(self) -> None:
        """Test entering puts the table cursor on the cell holding the cursor."""
        root, walker = walker_in_table(SCORES_HTML, "bob-art")

        assert walker.table_mode
        assert walker.current_node is by_id(root, "bob-art")
        assert (walker.get_row_index(), walker.get_col_index()) == (3, 3)

    def test_enter_from_table_element(self) -> None:
        """Test entering from the table itself starts at the first cell."""
        _, walker = walker_in_table(SCORES_HTML)

        assert cell_text(walker.current_node) == "Name"
        assert (walker.get_row_index(), walker.get_col_index()) == (1, 1)

    def test_enter_outside_table_fails(self) -> None:
        """Test entering fails when no table contains the cursor."""
        root = parse(SCORES_HTML)
        walker = SmartDomWalker(root, start=root.xpath("//h1")[0])

        assert not walker.enter_table()
        assert not walker.table_mode
        assert walker.current_table_navigator is None

    def test_exit_keeps_history(self) -> None:
        """Test leaving table mode keeps the entered tables."""
        _, walker = walker_in_table(SCORES_HTML, "ann-math")

        assert walker.exit_table()
        assert not walker.table_mode
        assert len(walker.tables) == 1
        assert not walker.exit_table()

    def test_queries_outside_table_mode(self) -> None:
        """Test table queries answer None or '' outside table mode."""
        walker = SmartDomWalker(parse(SCORES_HTML))

        assert walker.get_row_index() is None
        assert walker.get_col_index() is None
        assert walker.get_row_count() is None
        assert walker.get_col_count() is None
        assert walker.get_row_header_text() == ""
        assert walker.get_col_header_guess() == ""
        assert walker.next_row() is None

    def test_enter_nested_table(self) -> None:
        """Test entering again from a host cell pushes the nested table."""
        root, walker = walker_in_table(NESTED_HTML, table_id="outer")

        assert walker.next_col() is by_id(root, "host")
        assert walker.enter_table()
        assert walker.get_row_count() == 2
        assert cell_text(walker.current_node) == "i1"
        assert len(walker.tables) == 2

        walker.go_to_last_cell()
        assert cell_text(walker.current_node) == "i4"

    def test_enter_without_nested_table_fails(self) -> None:
        """Test entering from a cell without a nested table does nothing."""
        _, walker = walker_in_table(NESTED_HTML, table_id="outer")

        assert not walker.enter_table()
        assert len(walker.tables) == 1

    def test_exit_leaves_every_level(self) -> None:
        """Test exit_table clears the whole stack."""
        _, walker = walker_in_table(NESTED_HTML, table_id="outer")
        walker.next_col()
        walker.enter_table()

        walker.exit_table()

        assert not walker.table_mode
        assert len(walker.tables) == 2


class TestCellCommands:
    """Tests for cell movement commands."""

    def test_row_and_column_steps(self) -> None:
        """Test moving one cell in each direction."""
        root, walker = walker_in_table(SCORES_HTML, "ann-math")

        assert cell_text(walker.next_col()) == "85"
        assert cell_text(walker.next_row()) == "95"
        assert cell_text(walker.previous_col()) == "70"
        assert walker.previous_row() is by_id(root, "ann-math")

    def test_jumps(self) -> None:
        """Test jumps to the ends of the table, row and column."""
        _, walker = walker_in_table(SCORES_HTML, "ann-math")

        assert cell_text(walker.go_to_row_last_cell()) == "85"
        assert cell_text(walker.go_to_row_first_cell()) == "Ann"
        assert cell_text(walker.go_to_col_last_cell()) == "Bob"
        assert cell_text(walker.go_to_col_first_cell()) == "Name"
        assert cell_text(walker.go_to_last_cell()) == "95"
        assert cell_text(walker.go_to_first_cell()) == "Name"

    def test_failed_move_changes_nothing(self) -> None:
        """Test a move off the edge returns None and keeps both cursors."""
        _, walker = walker_in_table(SCORES_HTML)
        before = walker.current_node

        assert walker.previous_row() is None
        assert walker.previous_col() is None
        assert walker.current_node is before
        assert (walker.get_row_index(), walker.get_col_index()) == (1, 1)

    def test_move_records_previous_node(self) -> None:
        """Test cell moves update the previous node."""
        root, walker = walker_in_table(SCORES_HTML, "ann-math")
        walker.next_row()

        assert walker.previous_node is by_id(root, "ann-math")


class TestQueries:
    """Tests for dimensions, indexes and headers."""

    def test_dimensions(self) -> None:
        """Test row and column counts."""
        _, walker = walker_in_table(SCORES_HTML)

        assert walker.get_row_count() == 3
        assert walker.get_col_count() == 3

    def test_headers(self) -> None:
        """Test header texts for a data cell."""
        _, walker = walker_in_table(SCORES_HTML, "bob-art")

        assert walker.get_row_header_text() == "Bob"
        assert walker.get_col_header_text() == "Art"

    def test_header_guesses(self) -> None:
        """Test guesses use the first cell of the row and column."""
        _, walker = walker_in_table(PLAIN_HTML, table_id="plain")
        walker.go_to_last_cell()

        assert walker.get_row_header_text() == ""
        assert walker.get_col_header_text() == ""
        assert walker.get_row_header_guess() == "North"
        assert walker.get_col_header_guess() == "Sales"

    def test_linear_moves_sync_table_cursor(self) -> None:
        """Test next() inside the table moves the table cursor along."""
        _, walker = walker_in_table(SCORES_HTML, "ann-math")

        walker.next()

        assert cell_text(walker.current_node) == "85"
        assert (walker.get_row_index(), walker.get_col_index()) == (2, 3)

    def test_cell_with_block_content(self) -> None:
        """Test next from an entered cell reads the blocks inside it first."""
        _, walker = walker_in_table(BLOCK_CELLS_HTML, table_id="blocks")

        assert cell_text(walker.next()) == "X"
        assert cell_text(walker.next()) == "Y"
        assert cell_text(walker.next()) == "Z"
        assert walker.get_col_index() == 2
