"""
Graph visualization package - QGraphicsView-based coherence map.

This package provides the interactive standards graph with:
- Force-directed card layout driven by a frame timer
- Drag-to-pin cards, pan and zoom
- Highlighting by selection and search
"""

from .canvas import CoherenceCanvas
from .scene import MapScene
from .style_manager import StyleManager

__all__ = ["CoherenceCanvas", "MapScene", "StyleManager"]
