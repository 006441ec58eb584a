"""
Description sequences for the unit under the smart cursor.

DescriptionBuilder walks every content node inside the unit the smart
walker landed on, folds runs of identical annotations into a collection
summary and adds the table announcements.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from lxml import etree

from ..accessibility import dom_util
from ..accessibility.description import get_description_from_ancestors
from ..accessibility.nodes import Node
from ..accessibility.types import NavDescription
from ..config import NavigationConfig
from ..constants import EMPTY_CELL_MESSAGE, SPANNED_CELL_MESSAGE
from ..models.table import TraverseTable
from .linear import LinearDomWalker

logger = logging.getLogger(__name__)


class DescriptionBuilder:
    """Builds the description sequence for the unit under a walker's cursor.

    Attributes:
        root: Root element of the document
        config: Settings controlling collection folding
    """

    def __init__(self, root: etree._Element, config: NavigationConfig | None = None) -> None:
        self.root = root
        self.config = config or NavigationConfig()

    def is_annotation_collection(self, annotation: str) -> bool:
        """Check if records with this annotation are folded into a collection."""
        return annotation in self.config.collection_annotations

    def describe_unit(self, unit: Node, previous_node: Node | None) -> list[NavDescription]:
        """Describe every content node inside a unit in document order.

        Args:
            unit: The node the smart walker landed on
            previous_node: Node occupied before the move, used to compute the
                scope entered by the first record

        Returns:
            One record per content node of the unit
        """
        walker = LinearDomWalker(self.root, start=unit)
        walker.previous()
        walker.next()

        results: list[NavDescription] = []
        while walker.current_node is not None and dom_util.is_descendant_of_node(
            walker.current_node, unit
        ):
            if not results:
                ancestors = dom_util.get_unique_ancestors(previous_node, walker.current_node)
            else:
                ancestors = walker.get_unique_ancestors()
            results.append(get_description_from_ancestors(ancestors))
            walker.next()
        return results

    def fold_collection(self, results: list[NavDescription]) -> list[NavDescription]:
        """Replace repeated annotations with a single collection summary.

        Folding applies when at least ``collection_min_items`` records all
        carry the same non-empty, foldable annotation. The summary takes over
        the first record's context; the items keep their text.

        Args:
            results: Records for one unit

        Returns:
            The folded records, or ``results`` unchanged
        """
        if len(results) < self.config.collection_min_items:
            return results
        annotations = {result.annotation for result in results}
        if len(annotations) != 1:
            return results
        annotation = annotations.pop()
        if not annotation or not self.is_annotation_collection(annotation):
            return results

        first_context = results[0].context
        items = [replace(result, annotation="") for result in results]
        items[0] = replace(items[0], context="")
        summary = NavDescription(
            context=first_context,
            annotation=f"{annotation} collection with {len(results)} items",
        )
        logger.debug("Folded %d '%s' records into a collection", len(results), annotation)
        return [summary, *items]

    def build(
        self,
        unit: Node | None,
        previous_node: Node | None,
        table: TraverseTable | None = None,
        announce_table: bool = False,
    ) -> tuple[NavDescription, ...]:
        """Build the full description of a navigation step.

        Args:
            unit: The node the smart walker landed on (None for no content)
            previous_node: Node occupied before the move
            table: Active table model while in table mode, else None
            announce_table: Prefix the table's dimensions

        Returns:
            Ordered records: table summary, unit records (folded if
            applicable), then cell geometry notes
        """
        results = self.describe_unit(unit, previous_node) if unit is not None else []
        results = self.fold_collection(results)

        if announce_table and table is not None:
            summary = f"{table.row_count} rows, {table.col_count} columns"
            results.insert(0, NavDescription(context=summary))

        # Cell geometry notes close every description made in table mode.
        if table is not None:
            results.append(NavDescription(annotation=EMPTY_CELL_MESSAGE))
            results.append(NavDescription(annotation=SPANNED_CELL_MESSAGE))

        return tuple(results)
