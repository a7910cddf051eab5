"""
Styles and themes for the Coherence Map.

Light slate theme with blue accents.
"""

# Light theme colors
COLORS = {
    "bg_primary": "#ffffff",
    "bg_secondary": "#f8fafc",
    "bg_tertiary": "#f1f5f9",
    "text_primary": "#0f172a",
    "text_secondary": "#64748b",
    "text_muted": "#94a3b8",
    "accent": "#2563eb",
    "accent_hover": "#1d4ed8",
    "accent_soft": "#eff6ff",
    "prerequisite": "#0ea5e9",
    "dependent": "#8b5cf6",
    "search": "#f59e0b",
    "border": "#e2e8f0",
    "footer": "#0f172a",
    "insight_bg": "#eef2ff",
    "insight_text": "#312e81",
}

LIGHT_STYLESHEET = """
QMainWindow, QWidget {
    background-color: #ffffff;
    color: #0f172a;
    font-family: "Segoe UI", sans-serif;
}

QFrame#header {
    border-bottom: 1px solid #e2e8f0;
}
QLabel#logo {
    background-color: #2563eb;
    color: white;
    border-radius: 8px;
    font-size: 20px;
    font-weight: 900;
}
QLabel#title {
    font-size: 18px;
    font-weight: 900;
}
QLabel#subtitle {
    color: #94a3b8;
    font-size: 10px;
    font-weight: bold;
    letter-spacing: 2px;
}

QLineEdit#searchBox {
    background-color: #f1f5f9;
    border: none;
    border-radius: 16px;
    padding: 8px 16px;
    font-size: 13px;
    min-width: 280px;
}
QLineEdit#searchBox:focus {
    border: 2px solid #2563eb;
}

QComboBox {
    background-color: #f1f5f9;
    color: #334155;
    border: none;
    border-radius: 16px;
    padding: 8px 16px;
    font-weight: 600;
    min-width: 140px;
}
QComboBox::drop-down {
    border: none;
    width: 24px;
}
QComboBox QAbstractItemView {
    background-color: #ffffff;
    selection-background-color: #eff6ff;
    selection-color: #2563eb;
    border: 1px solid #e2e8f0;
}

QFrame#sidebarHeader {
    background-color: #f8fafc;
    border-bottom: 1px solid #f1f5f9;
}
QLabel#sidebarCount {
    color: #94a3b8;
    font-size: 10px;
    font-weight: 900;
    letter-spacing: 2px;
}
QPushButton#linkButton {
    background: transparent;
    border: none;
    color: #94a3b8;
    font-size: 11px;
    font-weight: bold;
    text-decoration: underline;
}
QPushButton#linkButton:hover {
    color: #0f172a;
}

QListWidget {
    border: none;
    border-right: 1px solid #e2e8f0;
}
QListWidget::item {
    padding: 12px 16px;
    border-bottom: 1px solid #f8fafc;
    border-left: 4px solid transparent;
}
QListWidget::item:hover {
    background-color: #f8fafc;
}
QListWidget::item:selected {
    background-color: #eff6ff;
    color: #2563eb;
    border-left: 4px solid #2563eb;
}

QPushButton#zoomButton {
    background-color: white;
    color: #475569;
    border: 1px solid #e2e8f0;
    border-radius: 20px;
    font-size: 18px;
}
QPushButton#zoomButton:hover {
    background-color: #f8fafc;
}

QFrame#detailsPanel {
    border-left: 1px solid #e2e8f0;
}
QLabel#gradeBadge {
    background-color: #dbeafe;
    color: #1d4ed8;
    border-radius: 4px;
    padding: 2px 8px;
    font-size: 11px;
    font-weight: bold;
}
QLabel#detailsCode {
    font-size: 24px;
    font-weight: 900;
    color: #1e293b;
}
QLabel#detailsDomain {
    color: #64748b;
    font-size: 13px;
}
QLabel#sectionTitle {
    color: #94a3b8;
    font-size: 11px;
    font-weight: bold;
    letter-spacing: 2px;
}
QTextBrowser {
    border: none;
    background: transparent;
}
QTextBrowser#insightText {
    background-color: #eef2ff;
    border: 1px solid #e0e7ff;
    border-radius: 12px;
    color: #312e81;
    padding: 12px;
}
QPushButton#insightButton {
    background-color: #2563eb;
    color: white;
    border: none;
    border-radius: 12px;
    padding: 12px;
    font-weight: bold;
}
QPushButton#insightButton:hover {
    background-color: #1d4ed8;
}
QPushButton#insightButton:disabled {
    background-color: #93c5fd;
}
QPushButton#closeButton {
    background: transparent;
    border: none;
    color: #94a3b8;
    font-size: 18px;
}

QFrame#footer {
    background-color: #0f172a;
}
QFrame#footer QLabel {
    background-color: #0f172a;
    color: #94a3b8;
    font-size: 10px;
    font-weight: bold;
    letter-spacing: 1px;
}
QFrame#footer QLabel#filterActive {
    color: #fbbf24;
}

QScrollBar:vertical {
    background: transparent;
    width: 6px;
    border: none;
}
QScrollBar::handle:vertical {
    background: #e2e8f0;
    border-radius: 3px;
    min-height: 30px;
}
QScrollBar::handle:vertical:hover {
    background: #cbd5e1;
}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {
    height: 0;
}

QStatusBar {
    background-color: #f8fafc;
    color: #64748b;
}

QToolTip {
    background-color: #0f172a;
    color: #f8fafc;
    border: none;
    padding: 4px;
}
"""
