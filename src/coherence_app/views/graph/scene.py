"""
MapScene - QGraphicsScene subclass for the coherence map.

All cards and edges are children of a single layer item. The layer carries
the pan/zoom transform, so scene coordinates equal viewport pixels and layer
coordinates equal simulation coordinates.
"""

import logging
from typing import Dict, Optional

from PyQt6.QtWidgets import QGraphicsScene, QGraphicsItem, QGraphicsRectItem
from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QBrush, QPen, QTransform

from coherence_core.domain.models import GraphEdge, ViewTransform
from coherence_core.services.highlight import HighlightTable
from coherence_core.services.layout_session import LayoutSession

from .items import StandardItem, EdgeItem
from .style_manager import StyleManager

logger = logging.getLogger(__name__)


class MapScene(QGraphicsScene):
    """
    QGraphicsScene holding the cards and edges of one layout session.

    Responsibilities:
    - Creates StandardItem/EdgeItem instances for a session's graph
    - Copies simulation positions onto items each frame
    - Applies highlight tables and the view transform
    - Maps scene points to simulation coordinates for dragging
    """

    def __init__(self, style_manager: Optional[StyleManager] = None):
        super().__init__()

        self._style = style_manager or StyleManager()

        self._layer = self._create_layer()

        # Item lookups
        self._node_items: Dict[str, StandardItem] = {}
        self._edge_items: Dict[GraphEdge, EdgeItem] = {}

        self._session: Optional[LayoutSession] = None

        self.setBackgroundBrush(QBrush(self._style.style.bg_color))

    def _create_layer(self) -> QGraphicsRectItem:
        layer = QGraphicsRectItem()
        layer.setPen(QPen(Qt.PenStyle.NoPen))
        layer.setFlag(QGraphicsItem.GraphicsItemFlag.ItemHasNoContents, True)
        self.addItem(layer)
        return layer

    # -------------------------------------------------------------------------
    # Building the Graph
    # -------------------------------------------------------------------------

    def clear_graph(self):
        """Remove every card and edge; the layer itself is kept."""
        for item in list(self._layer.childItems()):
            self.removeItem(item)
        self._node_items.clear()
        self._edge_items.clear()
        self._session = None

    def build_from_session(self, session: LayoutSession):
        """Create items for a session's nodes and edges."""
        self.clear_graph()
        self._session = session

        for node in session.nodes:
            item = StandardItem(node.standard, self._style)
            item.setParentItem(self._layer)
            self._node_items[node.code] = item

        for edge in session.edges:
            src = self._node_items.get(edge.source)
            dst = self._node_items.get(edge.target)
            if src is None or dst is None:
                continue
            item = EdgeItem(edge, src.pos(), dst.pos(), self._style)
            item.setParentItem(self._layer)
            self._edge_items[edge] = item

        self.sync_positions()
        logger.debug("Scene built: %d cards, %d edges",
                     len(self._node_items), len(self._edge_items))

    def sync_positions(self):
        """Copy node positions from the session onto the items."""
        if self._session is None:
            return

        for node in self._session.nodes:
            item = self._node_items.get(node.code)
            if item is None:
                continue
            position = node.position
            if position is None:
                item.setVisible(False)
                continue
            item.setVisible(True)
            item.setPos(position[0], position[1])

        for edge, item in self._edge_items.items():
            src = self._node_items[edge.source]
            dst = self._node_items[edge.target]
            item.setVisible(src.isVisible() and dst.isVisible())
            item.set_positions(src.pos(), dst.pos())

    # -------------------------------------------------------------------------
    # Highlighting and Transform
    # -------------------------------------------------------------------------

    def apply_highlights(self, table: HighlightTable):
        """Assign visuals from a highlight table; unknown codes are ignored."""
        for code, visual in table.nodes.items():
            item = self._node_items.get(code)
            if item is not None:
                item.visual = visual

        for edge, visual in table.edges.items():
            item = self._edge_items.get(edge)
            if item is not None:
                item.visual = visual

    def apply_transform(self, transform: ViewTransform):
        k = transform.k
        self._layer.setTransform(QTransform(k, 0, 0, k, transform.x, transform.y))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def standard_item_at(self, scene_pos: QPointF) -> Optional[StandardItem]:
        """Topmost card under a scene point, if any."""
        for item in self.items(scene_pos):
            while item is not None and not isinstance(item, StandardItem):
                item = item.parentItem()
            if item is not None:
                return item
        return None

    def to_layer(self, scene_pos: QPointF) -> QPointF:
        """Scene point to simulation coordinates."""
        return self._layer.mapFromScene(scene_pos)
