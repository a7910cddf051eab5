"""
Insight worker thread.

Runs the LLM insight request in the background without blocking the UI.
"""

from PyQt6.QtCore import QThread, pyqtSignal

from coherence_core.domain.models import Standard
from coherence_core.errors import RemoteServiceError
from coherence_core.services.insight import InsightService


class InsightWorker(QThread):
    """
    Background thread for one insight request.

    Signals:
        finished(str, str, str): Emitted when complete with (code, text, error)
    """

    finished = pyqtSignal(str, str, str)  # code, insight text, error

    def __init__(self, service: InsightService, standard: Standard):
        """
        Initialize the worker.

        Args:
            service: The insight service to use
            standard: The standard to explain
        """
        super().__init__()
        self.service = service
        self.standard = standard

    def run(self):
        """Run the insight request."""
        try:
            text = self.service.generate_insight(self.standard)
            self.finished.emit(self.standard.code, text, "")
        except RemoteServiceError as e:
            self.finished.emit(self.standard.code, "", str(e))
        except Exception as e:
            self.finished.emit(self.standard.code, "", f"Unexpected error: {e}")
