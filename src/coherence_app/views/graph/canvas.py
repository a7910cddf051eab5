"""
CoherenceCanvas - QGraphicsView-based coherence map.

Features:
- Cooperative frame loop (QTimer) driving the layout session
- Card dragging that pins nodes in the simulation
- Background drag to pan, wheel to zoom
- Floating zoom in / zoom out / reset buttons
"""

import logging
import time
from typing import Callable, Optional

from PyQt6.QtWidgets import QGraphicsView, QPushButton, QVBoxLayout, QWidget
from PyQt6.QtCore import Qt, QPointF, QTimer, pyqtSignal
from PyQt6.QtGui import QWheelEvent, QMouseEvent, QPainter, QResizeEvent

from coherence_core.domain.models import ViewTransform
from coherence_core.services.highlight import HighlightTable
from coherence_core.services.layout_session import LayoutSession

from .scene import MapScene
from .style_manager import StyleManager

logger = logging.getLogger(__name__)

# Pointer travel (pixels) below which a press/release counts as a click
CLICK_SLOP = 3


class CoherenceCanvas(QGraphicsView):
    """
    QGraphicsView showing one layout session.

    Signals:
        standard_clicked: Emitted when a card is clicked without dragging (code)
        scale_changed: Emitted when the zoom level changes
    """

    # Signals
    standard_clicked = pyqtSignal(str)
    scale_changed = pyqtSignal(float)

    def __init__(
        self,
        parent=None,
        frame_interval_ms: int = 16,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(parent)

        self._clock = clock

        # Style manager
        self._style = StyleManager()

        # Create scene
        self._scene = MapScene(self._style)
        self.setScene(self._scene)

        # Session and its guarded frame callback
        self._session: Optional[LayoutSession] = None
        self._frame_callback: Optional[Callable] = None

        # Frame loop
        self._timer = QTimer(self)
        self._timer.setInterval(frame_interval_ms)

        # Pointer state
        self._drag_code: Optional[str] = None
        self._drag_moved = False
        self._panning = False
        self._press_pos = QPointF()
        self._last_mouse_pos = QPointF()

        self._setup_view()
        self._setup_zoom_buttons()

    def _setup_view(self):
        """Configure the QGraphicsView."""
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing)

        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)

        # Scene coordinates are viewport pixels; the layer item does pan/zoom
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFrameShape(QGraphicsView.Shape.NoFrame)

        self.setMinimumSize(400, 300)

    def _setup_zoom_buttons(self):
        """Floating zoom controls in the bottom-right corner."""
        self._zoom_container = QWidget(self)
        self._zoom_container.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        layout = QVBoxLayout(self._zoom_container)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        for text, tip, handler in (
            ("+", "Zoom in", self.zoom_in),
            ("−", "Zoom out", self.zoom_out),
            ("⟳", "Reset view", self.reset_view),
        ):
            btn = QPushButton(text)
            btn.setObjectName("zoomButton")
            btn.setFixedSize(40, 40)
            btn.setToolTip(tip)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(handler)
            layout.addWidget(btn)

        self._zoom_container.adjustSize()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def session(self) -> Optional[LayoutSession]:
        return self._session

    # -------------------------------------------------------------------------
    # Session Binding
    # -------------------------------------------------------------------------

    def set_session(self, session: Optional[LayoutSession]):
        """
        Show a new layout session.

        The previous session's frame callback is disconnected; anything it
        still has queued is a no-op because that session is already closed.
        """
        self._timer.stop()
        if self._frame_callback is not None:
            self._timer.timeout.disconnect(self._frame_callback)
            self._frame_callback = None

        self._drag_code = None
        self._panning = False
        self._session = session

        if session is None:
            self._scene.clear_graph()
            return

        session.resize(self.viewport().width(), self.viewport().height())
        self._scene.build_from_session(session)
        self._scene.apply_transform(session.viewport.transform)
        session.viewport.on_change(session.guard(self._on_transform_changed))

        self._frame_callback = session.guard(self._advance_frame)
        self._timer.timeout.connect(self._frame_callback)
        self.ensure_running()

    def apply_highlights(self, table: HighlightTable):
        self._scene.apply_highlights(table)

    def ensure_running(self):
        """Start the frame loop if the session has work to do."""
        if self._session is None or self._session.closed:
            return
        if not self._timer.isActive():
            self._timer.start()

    def _advance_frame(self):
        more = self._session.frame(self._clock())
        self._scene.sync_positions()
        if not more and self._drag_code is None:
            self._timer.stop()

    def _on_transform_changed(self, transform: ViewTransform):
        self._scene.apply_transform(transform)
        self.scale_changed.emit(transform.k)

    # -------------------------------------------------------------------------
    # Zoom Commands
    # -------------------------------------------------------------------------

    def zoom_in(self):
        if self._session is None:
            return
        viewport = self._session.viewport
        viewport.zoom_by(viewport.settings.zoom_in_factor, self._clock())
        self.ensure_running()

    def zoom_out(self):
        if self._session is None:
            return
        viewport = self._session.viewport
        viewport.zoom_by(viewport.settings.zoom_out_factor, self._clock())
        self.ensure_running()

    def reset_view(self):
        if self._session is None:
            return
        self._session.viewport.reset(self._clock())
        self.ensure_running()

    # -------------------------------------------------------------------------
    # Mouse Handling
    # -------------------------------------------------------------------------

    def wheelEvent(self, event: QWheelEvent):
        """Zoom about the cursor."""
        if self._session is None:
            return
        delta = event.angleDelta().y()
        if delta == 0:
            return

        viewport = self._session.viewport
        step = viewport.settings.wheel_factor
        factor = step if delta > 0 else 1 / step
        pos = event.position()
        viewport.zoom_at(factor, (pos.x(), pos.y()))

    def mousePressEvent(self, event: QMouseEvent):
        """Start dragging a card or panning the background."""
        if event.button() != Qt.MouseButton.LeftButton or self._session is None:
            super().mousePressEvent(event)
            return

        pos = event.position()
        self._press_pos = pos
        self._last_mouse_pos = pos

        item = self._scene.standard_item_at(self.mapToScene(pos.toPoint()))
        if item is not None:
            self._drag_code = item.code
            self._drag_moved = False
            self._session.begin_drag(item.code)
            self.ensure_running()
        else:
            self._panning = True
            self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()

        if self._drag_code is not None and self._session is not None:
            if (pos - self._press_pos).manhattanLength() > CLICK_SLOP:
                self._drag_moved = True
            layer_pos = self._scene.to_layer(self.mapToScene(pos.toPoint()))
            self._session.drag_to(self._drag_code, layer_pos.x(), layer_pos.y())
        elif self._panning and self._session is not None:
            delta = pos - self._last_mouse_pos
            self._session.viewport.pan_by(delta.x(), delta.y())
        else:
            super().mouseMoveEvent(event)

        self._last_mouse_pos = pos

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return

        if self._drag_code is not None:
            code = self._drag_code
            self._drag_code = None
            if self._session is not None:
                self._session.end_drag(code)
                self.ensure_running()
            if not self._drag_moved:
                self.standard_clicked.emit(code)

        if self._panning:
            self._panning = False
            self.setCursor(Qt.CursorShape.ArrowCursor)

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        size = self.viewport().size()
        self._scene.setSceneRect(0, 0, size.width(), size.height())
        if self._session is not None:
            self._session.resize(size.width(), size.height())

        # Keep zoom buttons pinned bottom-right
        self._zoom_container.move(
            self.width() - self._zoom_container.width(),
            self.height() - self._zoom_container.height(),
        )
