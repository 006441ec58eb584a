"""
python_smartnav - Screen-reader style navigation over HTML document trees.

This package moves a reading cursor through a parsed document one meaningful
unit at a time: small self-contained blocks are read whole, structures such
as headings, lists and form controls are read piece by piece, and tables can
be traversed cell by cell with row and column headers.

Example:
    >>> from python_smartnav import NavigationSession, to_speech_text
    >>> with NavigationSession.from_file("report.html") as session:
    ...     step = session.read_next()
    ...     print(to_speech_text(step.descriptions))
    Quarterly results, Heading 1
"""

__version__ = "0.1.0"
__all__ = [
    "SmartDomWalker",
    "LinearDomWalker",
    "Traversable",
    "DescriptionBuilder",
    "TraverseTable",
    "ShadowCell",
    "NavDescription",
    "CellPosition",
    "TextNode",
    "Node",
    "NavigationConfig",
    "NavigationSession",
    "NavigationStep",
    # Errors
    "SmartNavError",
    "ConfigurationError",
    "DocumentLoadError",
    "SessionClosedError",
    # Export functionality
    "to_speech_text",
    "descriptions_to_dicts",
    "descriptions_to_yaml",
    "export_reading",
]

# Import accessibility records
from .accessibility.nodes import Node, TextNode
from .accessibility.types import CellPosition, NavDescription

# Import configuration
from .config import NavigationConfig
from .errors import (
    ConfigurationError,
    DocumentLoadError,
    SessionClosedError,
    SmartNavError,
)

# Import export functionality
from .export import (
    descriptions_to_dicts,
    descriptions_to_yaml,
    export_reading,
    to_speech_text,
)

# Import table model
from .models.table import ShadowCell, TraverseTable

# Import sessions
from .session import NavigationSession, NavigationStep

# Import walkers
from .walkers import DescriptionBuilder, LinearDomWalker, SmartDomWalker, Traversable
