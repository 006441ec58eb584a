"""
Cursor walkers: document-order traversal and smart navigation.
"""

from .description import DescriptionBuilder
from .linear import LinearDomWalker, Traversable
from .smart import SmartDomWalker

__all__ = [
    "DescriptionBuilder",
    "LinearDomWalker",
    "SmartDomWalker",
    "Traversable",
]
