"""
Edge QGraphicsItem for prerequisite links.

Renders a straight connector from prerequisite to dependent with an arrow
head stopping at the dependent card's edge.
"""

import math
from typing import Optional, TYPE_CHECKING

from PyQt6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPainter, QPainterPath, QPolygonF

from coherence_core.domain.enums import EdgeStyle
from coherence_core.domain.models import GraphEdge
from coherence_core.services.highlight import EdgeVisual

if TYPE_CHECKING:
    from ..style_manager import StyleManager

NEUTRAL_VISUAL = EdgeVisual(style=EdgeStyle.NEUTRAL, opacity=1.0, width=2.0)


class EdgeItem(QGraphicsItem):
    """
    QGraphicsItem for one directed edge.

    Features:
    - Straight line between card centers
    - Color and width by EdgeStyle
    - Arrow head at the target, offset to the card boundary
    """

    def __init__(
        self,
        edge: GraphEdge,
        src_pos: QPointF,
        dst_pos: QPointF,
        style_manager: Optional["StyleManager"] = None,
    ):
        super().__init__()

        self.edge = edge
        self._src_pos = src_pos
        self._dst_pos = dst_pos
        self._style = style_manager

        self._visual = NEUTRAL_VISUAL

        # Edges should be behind nodes
        self.setZValue(-1)

        # Don't intercept mouse events - allows panning through edges
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setAcceptHoverEvents(False)

    def set_positions(self, src: QPointF, dst: QPointF):
        """Update edge endpoints."""
        if self._src_pos != src or self._dst_pos != dst:
            self.prepareGeometryChange()
            self._src_pos = src
            self._dst_pos = dst
            self.update()

    # -------------------------------------------------------------------------
    # State Properties
    # -------------------------------------------------------------------------

    @property
    def visual(self) -> EdgeVisual:
        return self._visual

    @visual.setter
    def visual(self, value: EdgeVisual):
        if self._visual != value:
            self.prepareGeometryChange()
            self._visual = value
            self.setOpacity(value.opacity)
            self.update()

    # -------------------------------------------------------------------------
    # QGraphicsItem Interface
    # -------------------------------------------------------------------------

    def boundingRect(self) -> QRectF:
        rect = QRectF(self._src_pos, self._dst_pos).normalized()
        padding = 12 + self._visual.width
        return rect.adjusted(-padding, -padding, padding, padding)

    def shape(self) -> QPainterPath:
        path = QPainterPath()
        path.moveTo(self._src_pos)
        path.lineTo(self._dst_pos)
        return path

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ):
        """Paint the edge."""
        if not self._style:
            return

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.setPen(self._style.get_edge_pen(self._visual))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawLine(self._src_pos, self._dst_pos)

        self._draw_arrow_head(painter)

    def _draw_arrow_head(self, painter: QPainter):
        """Draw an arrow head just outside the target card."""
        src, dst = self._src_pos, self._dst_pos
        dx = dst.x() - src.x()
        dy = dst.y() - src.y()
        dist = math.hypot(dx, dy)

        offset = self._style.style.arrow_offset
        if dist <= offset:
            return

        angle = math.atan2(dy, dx)
        tip = QPointF(dst.x() - offset * math.cos(angle), dst.y() - offset * math.sin(angle))

        size = self._style.arrow_size(self._visual)
        arrow_angle = math.pi / 6  # 30 degrees
        p1 = QPointF(
            tip.x() - size * math.cos(angle - arrow_angle),
            tip.y() - size * math.sin(angle - arrow_angle),
        )
        p2 = QPointF(
            tip.x() - size * math.cos(angle + arrow_angle),
            tip.y() - size * math.sin(angle + arrow_angle),
        )

        painter.setBrush(self._style.get_arrow_brush(self._visual))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.drawPolygon(QPolygonF([tip, p1, p2]))
