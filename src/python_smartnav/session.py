"""
Caller-owned navigation sessions.

A NavigationSession bundles one document, one SmartDomWalker and the table
history it accumulates. Sessions are created explicitly, used by a single
caller and torn down with close() (or a with-block); nothing is shared
between sessions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import lxml.html
from lxml import etree

from .accessibility.nodes import Node
from .accessibility.types import NavDescription
from .config import NavigationConfig
from .errors import DocumentLoadError, SessionClosedError
from .models.table import TraverseTable
from .walkers.smart import SmartDomWalker

logger = logging.getLogger(__name__)

# Table movements accepted by run_table_command
TABLE_COMMANDS = (
    "go_to_first_cell",
    "go_to_last_cell",
    "go_to_row_first_cell",
    "go_to_row_last_cell",
    "go_to_col_first_cell",
    "go_to_col_last_cell",
    "previous_row",
    "next_row",
    "previous_col",
    "next_col",
)


@dataclass(frozen=True)
class NavigationStep:
    """The outcome of one navigation command.

    Attributes:
        node: Node the cursor landed on (None when there was nowhere to go)
        descriptions: Description records for the move
    """

    node: Node | None
    descriptions: tuple[NavDescription, ...] = ()

    @property
    def moved(self) -> bool:
        """Check if the command found a node."""
        return self.node is not None


class NavigationSession:
    """A reading session over one document.

    Example:
        >>> with NavigationSession.from_file("report.html") as session:
        ...     for step in session.read_all():
        ...         print(to_speech_text(step.descriptions))
    """

    def __init__(
        self,
        root: etree._Element,
        config: NavigationConfig | None = None,
        start: Node | None = None,
        source: str | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            root: Root element of the document
            config: Navigation settings
            start: Initial cursor position (defaults to before the first unit)
            source: Where the document came from, for display
        """
        self.root = root
        self.config = config or NavigationConfig()
        self.source = source
        self._walker: SmartDomWalker | None = SmartDomWalker(root, start=start, config=self.config)

    @classmethod
    def from_html(
        cls, markup: str | bytes, config: NavigationConfig | None = None
    ) -> NavigationSession:
        """Create a session over an HTML string.

        Raises:
            DocumentLoadError: If the markup cannot be parsed
        """
        try:
            root = lxml.html.document_fromstring(markup)
        except (etree.LxmlError, ValueError) as e:
            raise DocumentLoadError("<string>", str(e)) from e
        return cls(root, config=config, source="<string>")

    @classmethod
    def from_file(
        cls, path: str | Path, config: NavigationConfig | None = None
    ) -> NavigationSession:
        """Create a session over an HTML file.

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise DocumentLoadError(str(path), "file not found")
        try:
            root = lxml.html.parse(str(file_path)).getroot()
        except (OSError, etree.LxmlError, ValueError) as e:
            raise DocumentLoadError(str(path), str(e)) from e
        if root is None:
            raise DocumentLoadError(str(path), "document is empty")
        logger.debug(f"Loaded document from {path}")
        return cls(root, config=config, source=str(path))

    @property
    def closed(self) -> bool:
        """Check if the session has been torn down."""
        return self._walker is None

    def _require_walker(self, operation: str) -> SmartDomWalker:
        if self._walker is None:
            raise SessionClosedError(operation)
        return self._walker

    @property
    def walker(self) -> SmartDomWalker:
        """The session's smart walker."""
        return self._require_walker("walker")

    @property
    def tables(self) -> list[TraverseTable]:
        """Every table model entered during the session."""
        return self._require_walker("tables").tables

    def read_next(self) -> NavigationStep:
        """Move to the next unit and describe it."""
        walker = self._require_walker("read_next")
        node = walker.next()
        if node is None:
            return NavigationStep(None)
        return NavigationStep(node, walker.get_current_description())

    def read_previous(self) -> NavigationStep:
        """Move to the previous unit and describe it."""
        walker = self._require_walker("read_previous")
        node = walker.previous()
        if node is None:
            return NavigationStep(None)
        return NavigationStep(node, walker.get_current_description())

    def read_all(
        self, max_steps: int | None = None, reverse: bool = False
    ) -> Iterator[NavigationStep]:
        """Read the document unit by unit from the current position.

        Args:
            max_steps: Stop after this many units (None for no limit)
            reverse: Read backwards

        Yields:
            NavigationStep for every unit reached
        """
        read = self.read_previous if reverse else self.read_next
        count = 0
        while max_steps is None or count < max_steps:
            step = read()
            if not step.moved:
                return
            yield step
            count += 1

    def run_table_command(self, command: str) -> NavigationStep:
        """Run a table command by walker method name and describe the result.

        Args:
            command: One of the walker's table movement methods, e.g. 'next_row'

        Returns:
            NavigationStep (node is None if the move did not apply)

        Raises:
            ValueError: If the command is not a table movement
        """
        if command not in TABLE_COMMANDS:
            raise ValueError(f"Unknown table command '{command}'")
        walker = self._require_walker(command)
        node = getattr(walker, command)()
        if node is None:
            return NavigationStep(None)
        return NavigationStep(node, walker.get_current_description())

    def close(self) -> None:
        """Tear down the session; later calls raise SessionClosedError."""
        if self._walker is not None:
            self._walker.exit_table()
            self._walker = None
            logger.debug("Closed navigation session for %s", self.source or "document")

    def __enter__(self) -> NavigationSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<NavigationSession {self.source or 'document'} ({state})>"

