"""
Rendering of description sequences.

A navigation step produces an ordered tuple of NavDescription records. This
module turns those records into the forms a consumer needs: a spoken line,
plain mappings for serialization, or a YAML document for a whole reading.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Literal

import yaml

from .accessibility.types import NavDescription

if TYPE_CHECKING:
    from .session import NavigationStep

ExportFormat = Literal["text", "yaml"]


def to_speech_text(descriptions: Iterable[NavDescription], separator: str = ", ") -> str:
    """Join description records into one line of speech.

    Fields are read in speech order (context, text, user value, annotation)
    and empty fields are skipped.

    Args:
        descriptions: Records for one navigation step
        separator: Text placed between spoken fields

    Returns:
        The spoken line ('' if every field is empty)

    Example:
        >>> to_speech_text([NavDescription(text="Home", annotation="Link")])
        'Home, Link'
    """
    parts: list[str] = []
    for description in descriptions:
        for value in (
            description.context,
            description.text,
            description.user_value,
            description.annotation,
        ):
            if value:
                parts.append(value)
    return separator.join(parts)


def descriptions_to_dicts(descriptions: Iterable[NavDescription]) -> list[dict[str, str]]:
    """Convert records to plain mappings, one per record."""
    return [description.to_dict() for description in descriptions]


def descriptions_to_yaml(descriptions: Iterable[NavDescription]) -> str:
    """Serialize records as a YAML list."""
    return yaml.safe_dump(
        descriptions_to_dicts(descriptions),
        sort_keys=False,
        allow_unicode=True,
    )


def _step_to_dict(index: int, step: NavigationStep) -> dict[str, Any]:
    return {
        "step": index,
        "speech": to_speech_text(step.descriptions),
        "descriptions": descriptions_to_dicts(step.descriptions),
    }


def export_reading(steps: Sequence[NavigationStep], format: ExportFormat = "text") -> str:
    """Render a sequence of navigation steps.

    Args:
        steps: Steps produced by a NavigationSession
        format: 'text' for one spoken line per step, 'yaml' for the full records

    Returns:
        The rendered reading

    Raises:
        ValueError: If the format is not supported
    """
    if format == "text":
        lines = [to_speech_text(step.descriptions) for step in steps]
        return "\n".join(line for line in lines if line)
    if format == "yaml":
        return yaml.safe_dump(
            [_step_to_dict(index, step) for index, step in enumerate(steps, start=1)],
            sort_keys=False,
            allow_unicode=True,
        )
    raise ValueError(f"Unsupported export format '{format}'. Use 'text' or 'yaml'.")
