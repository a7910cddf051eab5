"""
Style manager for the coherence map.

Centralizes all colors, sizes, fonts, and pens. Items ask the style manager
for their look given a NodeVisual/EdgeVisual from the highlight compositor,
so the palette lives in one place.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPen, QBrush

from coherence_core.domain.enums import HighlightTier, EdgeStyle
from coherence_core.services.highlight import NodeVisual, EdgeVisual


@dataclass(frozen=True)
class TierColors:
    """Card colors for one highlight tier."""
    fill: QColor
    stroke: QColor
    code_text: QColor
    desc_text: QColor
    domain_text: QColor


@dataclass
class MapStyle:
    """All styling parameters for the map."""

    # Background
    bg_color: QColor = field(default_factory=lambda: QColor("#f8fafc"))

    # Card geometry
    card_width: float = 140.0
    card_height: float = 80.0
    card_radius: float = 12.0

    # Fonts (pixel sizes)
    code_font_px: int = 14
    desc_font_px: int = 9
    domain_font_px: int = 8

    # Arrow heads sit this far back from the target center (card edge)
    arrow_offset: float = 75.0
    arrow_size: float = 8.0


class StyleManager:
    """Manages all styling for the coherence map."""

    TIER_COLORS: Dict[HighlightTier, TierColors] = {
        HighlightTier.SELECTED: TierColors(
            QColor("#2563eb"), QColor("#1d4ed8"),
            QColor("#ffffff"), QColor("#dbeafe"), QColor("#93c5fd"),
        ),
        HighlightTier.PREREQUISITE: TierColors(
            QColor("#f0f9ff"), QColor("#0ea5e9"),
            QColor("#0369a1"), QColor("#0ea5e9"), QColor("#0ea5e9"),
        ),
        HighlightTier.DEPENDENT: TierColors(
            QColor("#f5f3ff"), QColor("#8b5cf6"),
            QColor("#6d28d9"), QColor("#8b5cf6"), QColor("#8b5cf6"),
        ),
        HighlightTier.SEARCH_MATCH: TierColors(
            QColor("#fffbeb"), QColor("#f59e0b"),
            QColor("#92400e"), QColor("#b45309"), QColor("#b45309"),
        ),
        HighlightTier.PLAIN: TierColors(
            QColor("#ffffff"), QColor("#e2e8f0"),
            QColor("#1e293b"), QColor("#64748b"), QColor("#94a3b8"),
        ),
    }

    EDGE_COLORS: Dict[EdgeStyle, QColor] = {
        EdgeStyle.NEUTRAL: QColor("#cbd5e1"),
        EdgeStyle.INCOMING: QColor("#0ea5e9"),
        EdgeStyle.OUTGOING: QColor("#8b5cf6"),
        EdgeStyle.MUTED: QColor("#e2e8f0"),
    }

    # Arrow heads: neutral and muted edges share the grey head
    ARROW_COLORS: Dict[EdgeStyle, QColor] = {
        EdgeStyle.NEUTRAL: QColor("#94a3b8"),
        EdgeStyle.INCOMING: QColor("#0ea5e9"),
        EdgeStyle.OUTGOING: QColor("#8b5cf6"),
        EdgeStyle.MUTED: QColor("#94a3b8"),
    }

    def __init__(self, style: Optional[MapStyle] = None):
        self.style = style or MapStyle()

    # -------------------------------------------------------------------------
    # Node Styling
    # -------------------------------------------------------------------------

    def tier_colors(self, tier: HighlightTier) -> TierColors:
        return self.TIER_COLORS[tier]

    def get_node_brush(self, visual: NodeVisual) -> QBrush:
        return QBrush(self.tier_colors(visual.tier).fill)

    def get_node_pen(self, visual: NodeVisual) -> QPen:
        pen = QPen(self.tier_colors(visual.tier).stroke, visual.stroke_width)
        if visual.dashed:
            # Dash pattern is in units of pen width; 4,2 px at width 4
            pen.setDashPattern([1.0, 0.5])
        return pen

    def get_font(self, pixel_size: int, bold: bool = False) -> QFont:
        font = QFont("Segoe UI")
        font.setPixelSize(pixel_size)
        if bold:
            font.setWeight(QFont.Weight.Black)
        return font

    def code_font(self) -> QFont:
        return self.get_font(self.style.code_font_px, bold=True)

    def desc_font(self) -> QFont:
        return self.get_font(self.style.desc_font_px)

    def domain_font(self) -> QFont:
        font = self.get_font(self.style.domain_font_px, bold=True)
        font.setCapitalization(QFont.Capitalization.AllUppercase)
        return font

    # -------------------------------------------------------------------------
    # Edge Styling
    # -------------------------------------------------------------------------

    def get_edge_pen(self, visual: EdgeVisual) -> QPen:
        pen = QPen(self.EDGE_COLORS[visual.style], visual.width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        return pen

    def get_arrow_brush(self, visual: EdgeVisual) -> QBrush:
        return QBrush(self.ARROW_COLORS[visual.style])

    def arrow_size(self, visual: EdgeVisual) -> float:
        # Related edges get the larger head
        return self.style.arrow_size * (1.4 if visual.emphasized else 1.0)
