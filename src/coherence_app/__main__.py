"""
Main entry point for the Coherence Map application.

Usage:
    python -m coherence_app
    coherence-map  (if installed)
"""

import sys
import traceback
from pathlib import Path
from datetime import datetime


def setup_exception_hook():
    """Setup global exception hook to catch Qt exceptions."""
    log_file = Path.cwd() / "crash_log.txt"

    def exception_hook(exctype, value, tb):
        # Write to log file
        error_msg = ''.join(traceback.format_exception(exctype, value, tb))
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"UNHANDLED EXCEPTION at {datetime.now()}\n")
            f.write(f"{'='*60}\n")
            f.write(error_msg)
            f.write("\n")

        # Print to console
        print("\n" + "="*60)
        print("UNHANDLED EXCEPTION!")
        print("="*60)
        print(error_msg)
        print(f"\nError log saved to: {log_file}")

        # Call default handler
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = exception_hook


def main():
    """Launch the Coherence Map application."""
    # Setup exception hook first
    setup_exception_hook()

    # Ensure src is in path for development
    src_path = Path(__file__).parent.parent
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))

    from coherence_core.config import AppConfig
    from coherence_core.logging_config import setup_logging, parse_level

    config = AppConfig.from_env()
    setup_logging(parse_level(config.log_level), config.log_file)

    from PyQt6.QtWidgets import QApplication
    from PyQt6.QtCore import Qt

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Coherence Map")
    app.setOrganizationName("Coherence Map")

    from coherence_app.resources.styles import LIGHT_STYLESHEET
    app.setStyleSheet(LIGHT_STYLESHEET)

    # Services
    from coherence_core.adapters import get_default_provider
    from coherence_core.services import StandardsRepository, InsightService

    repository = StandardsRepository(config.data_file)
    llm = get_default_provider(config.llm_provider, config.llm_model)
    insight_service = InsightService(llm) if llm is not None else None

    # Import and create main window
    from coherence_app.views.main_window import MainWindow

    window = MainWindow(config, repository, insight_service)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
