"""
Tests for LinearDomWalker document-order traversal.
"""

import lxml.html
from lxml import etree

from python_smartnav.accessibility.nodes import TextNode
from python_smartnav.walkers import LinearDomWalker, Traversable

ARTICLE_HTML = """<html><head><title>Ignored</title></head><body>
<h1>Title</h1>
<p>Hello <b>bold</b> world</p>
<p hidden>Secret</p>
<script>ignored()</script>
<img alt="Chart" src="chart.png">
<img alt="" src="spacer.gif">
<p>   </p>
<p>End</p>
</body></html>"""


def parse(markup: str) -> etree._Element:
    return lxml.html.document_fromstring(markup)


def text_of(node) -> str:
    if isinstance(node, TextNode):
        return node.text
    return node.get("alt") or node.tag


def read_forward(walker: LinearDomWalker) -> list[str]:
    texts = []
    while (node := walker.next()) is not None:
        texts.append(text_of(node))
    return texts


class TestForward:
    """Tests for moving forward."""

    def test_reads_every_unit_in_order(self) -> None:
        """Test text runs and images are separate stops; empty content is skipped."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))

        assert read_forward(walker) == ["Title", "Hello ", "bold", " world", "Chart", "End"]

    def test_end_of_document(self) -> None:
        """Test next past the last unit returns None and resets the cursor."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))
        read_forward(walker)

        assert walker.current_node is None
        assert walker.next() is not None

    def test_container_start_enters_subtree(self) -> None:
        """Test a cursor on a container moves to its first unit."""
        root = parse(ARTICLE_HTML)
        paragraph = root.xpath("//p")[0]
        walker = LinearDomWalker(root, start=paragraph)

        assert text_of(walker.next()) == "Hello "

    def test_previous_node_is_recorded(self) -> None:
        """Test each move remembers where it came from."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))
        first = walker.next()
        second = walker.next()

        assert walker.previous_node == first
        assert walker.current_node == second


class TestBackward:
    """Tests for moving backward."""

    def test_previous_from_outside_goes_to_last(self) -> None:
        """Test previous with no cursor lands on the last unit."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))
        assert text_of(walker.previous()) == "End"

    def test_reads_backward(self) -> None:
        """Test reading backward visits the same units in reverse."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))
        texts = []
        while (node := walker.previous()) is not None:
            texts.append(text_of(node))

        assert texts == ["End", "Chart", " world", "bold", "Hello ", "Title"]

    def test_round_trip(self) -> None:
        """Test next then previous returns to the starting unit."""
        walker = LinearDomWalker(parse(ARTICLE_HTML))
        walker.next()
        start = walker.next()

        walker.next()
        assert walker.previous() == start

    def test_container_cursor_goes_before_subtree(self) -> None:
        """Test previous from a container lands before it."""
        root = parse(ARTICLE_HTML)
        walker = LinearDomWalker(root, start=root.xpath("//p")[0])

        assert text_of(walker.previous()) == "Title"


class TestPredicate:
    """Tests for custom leaf predicates."""

    def test_custom_predicate_groups_paragraphs(self) -> None:
        """Test a predicate accepting paragraphs makes each one a unit."""
        root = parse(ARTICLE_HTML)
        walker = LinearDomWalker(
            root,
            is_leaf=lambda node: isinstance(node, TextNode) or node.tag in ("p", "img", "h1"),
        )

        units = []
        while (node := walker.next()) is not None:
            units.append(node.tag if not isinstance(node, TextNode) else node.text)

        assert units == ["h1", "p", "img", "p"]

    def test_container_start_with_childless_first_unit(self) -> None:
        """Test a first unit without child elements is not skipped."""
        root = parse(ARTICLE_HTML)
        walker = LinearDomWalker(
            root,
            start=root.xpath("//body")[0],
            is_leaf=lambda node: isinstance(node, TextNode) or node.tag in ("p", "img", "h1"),
        )

        assert walker.next().tag == "h1"

    def test_unique_ancestors_of_move(self) -> None:
        """Test the scope entered by moving into the bold text."""
        root = parse(ARTICLE_HTML)
        walker = LinearDomWalker(root)
        walker.next()
        walker.next()
        walker.next()

        bold = root.xpath("//b")[0]
        assert walker.get_unique_ancestors() == [bold, TextNode(bold)]

    def test_is_traversable(self) -> None:
        """Test the walker satisfies the Traversable protocol."""
        assert isinstance(LinearDomWalker(parse(ARTICLE_HTML)), Traversable)
