"""
Standard card QGraphicsItem.

Renders one standard as a rounded card: code, truncated description and
domain. Position comes from the force simulation; look comes from the
NodeVisual the scene assigns.
"""

from typing import Optional, TYPE_CHECKING

from PyQt6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QPainterPath, QColor

from coherence_core.domain.enums import HighlightTier
from coherence_core.domain.models import Standard
from coherence_core.services.highlight import NodeVisual

if TYPE_CHECKING:
    from ..style_manager import StyleManager

PLAIN_VISUAL = NodeVisual(tier=HighlightTier.PLAIN, opacity=1.0, stroke_width=2.0)


class StandardItem(QGraphicsItem):
    """
    QGraphicsItem for one standard card.

    Features:
    - Rounded rectangle centered on the node position
    - Fill/stroke/text colors by highlight tier
    - Dashed outline for search-only matches
    - Opacity dimming for unrelated cards
    - Hover ring
    """

    def __init__(
        self,
        standard: Standard,
        style_manager: Optional["StyleManager"] = None,
    ):
        super().__init__()

        self.standard = standard
        self._style = style_manager

        # State
        self._visual = PLAIN_VISUAL
        self._hovered = False

        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(f"{standard.code}\n{standard.description}")

    @property
    def code(self) -> str:
        return self.standard.code

    # -------------------------------------------------------------------------
    # State Properties
    # -------------------------------------------------------------------------

    @property
    def visual(self) -> NodeVisual:
        return self._visual

    @visual.setter
    def visual(self, value: NodeVisual):
        if self._visual != value:
            self._visual = value
            self.setOpacity(value.opacity)
            # Selected card paints above its neighbours
            self.setZValue(2 if value.tier == HighlightTier.SELECTED else 1)
            self.update()

    # -------------------------------------------------------------------------
    # QGraphicsItem Interface
    # -------------------------------------------------------------------------

    def _card_rect(self) -> QRectF:
        w, h = self._card_size()
        return QRectF(-w / 2, -h / 2, w, h)

    def _card_size(self):
        if self._style:
            return self._style.style.card_width, self._style.style.card_height
        return 140.0, 80.0

    def boundingRect(self) -> QRectF:
        # Pad for the widest stroke and hover ring
        padding = 6
        return self._card_rect().adjusted(-padding, -padding, padding, padding)

    def shape(self) -> QPainterPath:
        path = QPainterPath()
        radius = self._style.style.card_radius if self._style else 12.0
        path.addRoundedRect(self._card_rect(), radius, radius)
        return path

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ):
        """Paint the card."""
        if not self._style:
            return

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        rect = self._card_rect()
        radius = self._style.style.card_radius
        colors = self._style.tier_colors(self._visual.tier)

        painter.setBrush(self._style.get_node_brush(self._visual))
        painter.setPen(self._style.get_node_pen(self._visual))
        painter.drawRoundedRect(rect, radius, radius)

        if self._hovered:
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.setPen(QColor(37, 99, 235, 80))
            painter.drawRoundedRect(rect.adjusted(-4, -4, 4, 4), radius + 2, radius + 2)

        self._draw_text(painter, rect, colors)

    def _draw_text(self, painter: QPainter, rect: QRectF, colors):
        """Code, description and domain stacked around the vertical center."""
        w = rect.width()

        painter.setFont(self._style.code_font())
        painter.setPen(colors.code_text)
        painter.drawText(QRectF(-w / 2, -30, w, 20), Qt.AlignmentFlag.AlignCenter, self.standard.code)

        painter.setFont(self._style.desc_font())
        painter.setPen(colors.desc_text)
        painter.drawText(QRectF(-w / 2, -4, w, 14), Qt.AlignmentFlag.AlignCenter,
                         self.standard.short_description())

        painter.setFont(self._style.domain_font())
        painter.setPen(colors.domain_text)
        painter.drawText(QRectF(-w / 2, 12, w, 14), Qt.AlignmentFlag.AlignCenter, self.standard.domain)

    # -------------------------------------------------------------------------
    # Event Handlers
    # -------------------------------------------------------------------------

    def hoverEnterEvent(self, event):
        self._hovered = True
        self.update()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self._hovered = False
        self.update()
        super().hoverLeaveEvent(event)
