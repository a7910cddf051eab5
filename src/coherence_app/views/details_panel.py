"""
Details panel for the selected standard.

Bound to a DetailsVM; shows description, cluster context, optional
sections and the AI insight block.
"""

from PyQt6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QScrollArea,
    QTextBrowser, QWidget, QSizePolicy,
)
from PyQt6.QtCore import Qt

from ..viewmodels import DetailsVM


def _rich_text_view(html: str) -> QLabel:
    """Word-wrapped HTML block that sizes itself to its content."""
    label = QLabel(html)
    label.setTextFormat(Qt.TextFormat.RichText)
    label.setWordWrap(True)
    label.setOpenExternalLinks(True)
    label.setTextInteractionFlags(Qt.TextInteractionFlag.TextBrowserInteraction)
    label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)
    return label


class DetailsPanel(QFrame):
    """Right-hand panel showing one standard."""

    def __init__(self, vm: DetailsVM, parent=None):
        super().__init__(parent)
        self.setObjectName("detailsPanel")
        self.setFixedWidth(400)

        self._vm = vm

        self._setup_ui()
        self._bind_viewmodel()
        self._render()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        # Header
        header = QHBoxLayout()
        header.setContentsMargins(24, 24, 24, 12)
        titles = QVBoxLayout()
        self._grade_badge = QLabel()
        self._grade_badge.setObjectName("gradeBadge")
        self._grade_badge.setSizePolicy(QSizePolicy.Policy.Maximum, QSizePolicy.Policy.Fixed)
        self._code_label = QLabel()
        self._code_label.setObjectName("detailsCode")
        self._domain_label = QLabel()
        self._domain_label.setObjectName("detailsDomain")
        titles.addWidget(self._grade_badge)
        titles.addWidget(self._code_label)
        titles.addWidget(self._domain_label)
        header.addLayout(titles)
        header.addStretch()

        close_btn = QPushButton("✕")
        close_btn.setObjectName("closeButton")
        close_btn.setFixedSize(32, 32)
        close_btn.setToolTip("Close")
        close_btn.clicked.connect(self._vm.request_close)
        header.addWidget(close_btn, alignment=Qt.AlignmentFlag.AlignTop)
        outer.addLayout(header)

        # Scrollable body, rebuilt per standard
        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        outer.addWidget(self._scroll, 1)

        # Insight footer
        insight_box = QVBoxLayout()
        insight_box.setContentsMargins(24, 12, 24, 24)
        self._insight_btn = QPushButton("AI Teacher's Assistant")
        self._insight_btn.setObjectName("insightButton")
        self._insight_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._insight_btn.clicked.connect(self._vm.request_insight)
        insight_box.addWidget(self._insight_btn)

        self._insight_view = QTextBrowser()
        self._insight_view.setObjectName("insightText")
        self._insight_view.setOpenExternalLinks(True)
        self._insight_view.setMinimumHeight(160)
        self._insight_view.hide()
        insight_box.addWidget(self._insight_view)
        outer.addLayout(insight_box)

    def _bind_viewmodel(self):
        self._vm.standard_changed.connect(lambda _s: self._render())
        self._vm.insight_changed.connect(self._on_insight_changed)
        self._vm.loading_changed.connect(self._on_loading_changed)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render(self):
        standard = self._vm.standard
        self.setVisible(standard is not None)
        if standard is None:
            return

        self._grade_badge.setText(standard.grade)
        self._code_label.setText(standard.code)
        self._domain_label.setText(standard.domain)

        body = QWidget()
        layout = QVBoxLayout(body)
        layout.setContentsMargins(24, 12, 24, 12)
        layout.setSpacing(16)

        layout.addWidget(self._section_title("DESCRIPTION"))
        layout.addWidget(_rich_text_view(self._vm.description_html))

        cluster = self._vm.cluster
        if cluster is not None:
            layout.addWidget(self._section_title("CLUSTER CONTEXT"))
            parts = [f"<p><b>{cluster.cluster}</b></p>"]
            if cluster.terminology:
                parts.append(f"<p><b>Terminology:</b> {cluster.terminology}</p>")
            if cluster.clarifications:
                parts.append(f"<p>{cluster.clarifications}</p>")
            layout.addWidget(_rich_text_view("".join(parts)))

        for section in self._vm.sections:
            layout.addWidget(self._section_title(section.title.upper()))
            layout.addWidget(_rich_text_view(section.html))

        layout.addStretch()
        self._scroll.setWidget(body)

        self._insight_btn.setEnabled(not self._vm.is_loading)
        if not self._vm.insight_available:
            self._insight_btn.setToolTip("Set GOOGLE_API_KEY or ANTHROPIC_API_KEY to enable")
        self._on_insight_changed(self._vm.insight)

    def _section_title(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setObjectName("sectionTitle")
        return label

    def _on_insight_changed(self, text: str):
        if text:
            self._insight_view.setMarkdown(text)
            self._insight_view.show()
        else:
            self._insight_view.clear()
            self._insight_view.hide()

    def _on_loading_changed(self, loading: bool):
        self._insight_btn.setEnabled(not loading)
        self._insight_btn.setText("Thinking..." if loading else "AI Teacher's Assistant")
