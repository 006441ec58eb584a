"""
Description records for navigation steps.

get_description_from_ancestors turns the chain of nodes entered by a move
into one NavDescription: what the target says, what the user entered into
it, its role, and the roles of the scopes that were entered on the way.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..constants import SILENT_ROLES
from . import dom_util
from .aria import get_role_text, get_state
from .nodes import Node
from .types import NavDescription


def get_description_from_ancestors(ancestors: Sequence[Node]) -> NavDescription:
    """Describe the last node of an ancestor chain.

    The text and user value come from the last node. Walking outwards, the
    first node with a role becomes the annotation (with its state); roles of
    the nodes further out are prepended to the context.

    Args:
        ancestors: Newly entered nodes, root-most first, ending with the target

    Returns:
        NavDescription for the target node
    """
    if not ancestors:
        return NavDescription()

    target = ancestors[-1]
    text = dom_util.collapse_whitespace(dom_util.get_name(target))
    user_value = dom_util.collapse_whitespace(dom_util.get_value(target))

    annotation = ""
    context_parts: list[str] = []
    for node in reversed(ancestors):
        if dom_util.get_role(node) in SILENT_ROLES:
            continue
        role_text = get_role_text(node)
        if not role_text:
            continue
        entry = dom_util.collapse_whitespace(f"{role_text} {get_state(node)}")
        if not annotation:
            annotation = entry
        else:
            context_parts.insert(0, entry)

    return NavDescription(
        context=" ".join(context_parts),
        text=text,
        user_value=user_value,
        annotation=annotation,
    )
