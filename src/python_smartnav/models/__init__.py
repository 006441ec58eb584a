"""
Models for structured views over document subtrees.
"""

from .table import ShadowCell, TraverseTable

__all__ = ["ShadowCell", "TraverseTable"]
