"""
Main Window for the Coherence Map.

Thin view layer using MVVM pattern:
- ViewModels hold state and business logic
- This view handles UI layout and binding
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QLineEdit, QComboBox, QFrame, QListWidget, QListWidgetItem, QMessageBox,
)
from PyQt6.QtCore import Qt

from .details_panel import DetailsPanel
from .graph import CoherenceCanvas
from ..resources.styles import COLORS
from ..viewmodels import MapVM, DetailsVM, AppCoordinator
from coherence_core.config import AppConfig
from coherence_core.errors import DataLoadError
from coherence_core.services.data_loader import StandardsRepository
from coherence_core.services.insight import InsightService

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window using MVVM pattern."""

    def __init__(
        self,
        config: AppConfig,
        repository: StandardsRepository,
        insight_service: Optional[InsightService] = None,
    ):
        super().__init__()

        self.setWindowTitle("Math Standards Explorer")
        self.resize(1400, 900)

        self._config = config
        self._repository = repository
        self._insight_service = insight_service

        # Initialize ViewModels
        self._init_viewmodels()

        # Setup UI
        self._setup_ui()

        # Bind ViewModels to UI
        self._bind_viewmodels()

        # Initial data load
        self._load()

    # -------------------------------------------------------------------------
    # ViewModel Initialization
    # -------------------------------------------------------------------------

    def _init_viewmodels(self):
        """Initialize all ViewModels."""
        self._map_vm = MapVM(self._repository, self._config)
        self._details_vm = DetailsVM(self._insight_service, self._config.image_base_url)

        # Create coordinator for cross-VM wiring
        self._coordinator = AppCoordinator(self._repository, self._map_vm, self._details_vm)

    def _bind_viewmodels(self):
        """Bind ViewModel signals to UI updates."""
        # Map bindings
        self._map_vm.session_changed.connect(lambda: self.canvas.set_session(self._map_vm.session))
        self._map_vm.highlights_changed.connect(
            lambda: self.canvas.apply_highlights(self._map_vm.highlights)
        )
        self._map_vm.animation_requested.connect(self.canvas.ensure_running)
        self._map_vm.sidebar_changed.connect(self._update_sidebar)
        self._map_vm.query_changed.connect(self._on_query_changed)
        self._map_vm.grade_changed.connect(self._on_grade_changed)

        # Canvas input
        self.canvas.standard_clicked.connect(self._map_vm.select_code)

        # Coordinator bindings
        self._coordinator.status_message.connect(self._show_status)

    def _load(self):
        """Load standards and build the first layout."""
        viewport = self.canvas.viewport().size()
        if viewport.width() > 0 and viewport.height() > 0:
            self._map_vm.set_viewport_size(viewport.width(), viewport.height())

        try:
            self._map_vm.load()
        except DataLoadError as e:
            logger.error("Could not load standards: %s", e)
            QMessageBox.critical(self, "Data Error", str(e))
            return

        self._populate_grades()

    # -------------------------------------------------------------------------
    # UI Setup
    # -------------------------------------------------------------------------

    def _setup_ui(self):
        """Setup the main UI layout."""
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._build_header())

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)
        body.addWidget(self._build_sidebar())

        self.canvas = CoherenceCanvas()
        body.addWidget(self.canvas, stretch=1)

        self.details_panel = DetailsPanel(self._details_vm)
        body.addWidget(self.details_panel)
        layout.addLayout(body, stretch=1)

        layout.addWidget(self._build_footer())

    def _build_header(self) -> QFrame:
        header = QFrame()
        header.setObjectName("header")
        header.setFixedHeight(64)
        layout = QHBoxLayout(header)
        layout.setContentsMargins(24, 8, 24, 8)
        layout.setSpacing(12)

        logo = QLabel("Σ")
        logo.setObjectName("logo")
        logo.setFixedSize(40, 40)
        logo.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(logo)

        titles = QVBoxLayout()
        titles.setSpacing(0)
        title = QLabel("Math Standards Explorer")
        title.setObjectName("title")
        subtitle = QLabel("HAWAII DOE FRAMEWORK")
        subtitle.setObjectName("subtitle")
        titles.addWidget(title)
        titles.addWidget(subtitle)
        layout.addLayout(titles)
        layout.addStretch()

        self.search_input = QLineEdit()
        self.search_input.setObjectName("searchBox")
        self.search_input.setPlaceholderText("Search by code (e.g. K.CC)...")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.textChanged.connect(self._map_vm.set_query)
        layout.addWidget(self.search_input)

        self.grade_combo = QComboBox()
        self.grade_combo.currentTextChanged.connect(self._on_grade_selected)
        layout.addWidget(self.grade_combo)

        return header

    def _build_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setFixedWidth(320)
        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QFrame()
        header.setObjectName("sidebarHeader")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(16, 12, 16, 12)
        self.sidebar_count = QLabel()
        self.sidebar_count.setObjectName("sidebarCount")
        header_layout.addWidget(self.sidebar_count)
        header_layout.addStretch()

        self.clear_filter_btn = QPushButton("Clear Filter")
        self.clear_filter_btn.setObjectName("linkButton")
        self.clear_filter_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.clear_filter_btn.clicked.connect(self.search_input.clear)
        self.clear_filter_btn.hide()
        header_layout.addWidget(self.clear_filter_btn)
        layout.addWidget(header)

        self.standards_list = QListWidget()
        self.standards_list.setWordWrap(True)
        self.standards_list.itemClicked.connect(self._on_list_item_clicked)
        layout.addWidget(self.standards_list, stretch=1)

        self.empty_label = QLabel("No standards match your search.")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setStyleSheet(f"color: {COLORS['text_muted']}; font-style: italic; padding: 32px;")
        self.empty_label.hide()
        layout.addWidget(self.empty_label)

        return sidebar

    def _build_footer(self) -> QFrame:
        footer = QFrame()
        footer.setObjectName("footer")
        footer.setFixedHeight(32)
        layout = QHBoxLayout(footer)
        layout.setContentsMargins(24, 0, 24, 0)
        layout.setSpacing(24)

        self.status_label = QLabel()
        layout.addWidget(self.status_label)

        self.filter_label = QLabel("FILTER ACTIVE")
        self.filter_label.setObjectName("filterActive")
        self.filter_label.hide()
        layout.addWidget(self.filter_label)
        layout.addStretch()

        legend = [
            ("Active", COLORS["accent"]),
            ("Prerequisite", COLORS["prerequisite"]),
            ("Dependent", COLORS["dependent"]),
            ("Search Match", COLORS["search"]),
        ]
        for text, color in legend:
            entry = QLabel(f'<span style="color: {color};">●</span> {text.upper()}')
            entry.setTextFormat(Qt.TextFormat.RichText)
            layout.addWidget(entry)

        return footer

    # -------------------------------------------------------------------------
    # Update Handlers
    # -------------------------------------------------------------------------

    def _populate_grades(self):
        self.grade_combo.blockSignals(True)
        self.grade_combo.clear()
        self.grade_combo.addItems(self._map_vm.grades)
        self.grade_combo.setCurrentText(self._map_vm.grade)
        self.grade_combo.blockSignals(False)

    def _update_sidebar(self):
        self.sidebar_count.setText(self._map_vm.sidebar_label.upper())

        selected = self._map_vm.selected
        self.standards_list.blockSignals(True)
        self.standards_list.clear()
        for standard in self._map_vm.sidebar_standards:
            item = QListWidgetItem(f"{standard.code}\n{standard.description}")
            item.setData(Qt.ItemDataRole.UserRole, standard.code)
            item.setToolTip(standard.domain)
            self.standards_list.addItem(item)
            if selected is not None and standard.code == selected.code:
                item.setSelected(True)
                self.standards_list.setCurrentItem(item)
        self.standards_list.blockSignals(False)

        empty = self.standards_list.count() == 0
        self.standards_list.setVisible(not empty)
        self.empty_label.setVisible(empty)

    def _on_query_changed(self, query: str):
        active = self._map_vm.has_query
        self.clear_filter_btn.setVisible(active)
        self.filter_label.setVisible(active)
        if self.search_input.text() != query:
            self.search_input.setText(query)

    def _on_grade_changed(self, grade: str):
        if self.grade_combo.currentText() != grade:
            self._populate_grades()

    def _on_grade_selected(self, grade: str):
        if grade:
            self._map_vm.set_grade(grade)

    def _on_list_item_clicked(self, item: QListWidgetItem):
        self._map_vm.select_code(item.data(Qt.ItemDataRole.UserRole))

    def _show_status(self, message: str, timeout: int):
        """Show footer status message."""
        self.status_label.setText(message.upper())

    # -------------------------------------------------------------------------
    # Window Events
    # -------------------------------------------------------------------------

    def closeEvent(self, event):
        """Handle window close."""
        self.canvas.set_session(None)
        self._map_vm.shutdown()
        event.accept()
