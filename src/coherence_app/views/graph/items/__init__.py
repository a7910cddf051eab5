"""
QGraphicsItem subclasses for the coherence map.
"""

from .standard_item import StandardItem
from .edge_item import EdgeItem

__all__ = ["StandardItem", "EdgeItem"]
