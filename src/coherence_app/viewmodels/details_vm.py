"""
Details ViewModel for the standard details panel.

Manages:
- The standard being shown and its cluster context
- Rendered HTML sections (description, clarifications, examples, ...)
- AI insight requests and their results
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from ..workers.insight_worker import InsightWorker
from coherence_core.config import DEFAULT_IMAGE_BASE_URL
from coherence_core.domain.models import Standard, ClusterInfo
from coherence_core.services.insight import InsightService, FAILURE_TEXT
from coherence_core.services.rich_text import prepare_content

logger = logging.getLogger(__name__)


@dataclass
class DetailSection:
    """One titled block of rich text in the details panel."""
    title: str
    html: str


class DetailsVM(BaseViewModel):
    """
    ViewModel for the details panel.

    Signals:
        standard_changed: Emitted when the shown standard changes (Standard or None)
        insight_changed: Emitted when insight text changes (markdown, may be empty)
        loading_changed: Emitted when an insight request starts or ends
        close_requested: Emitted when the user closes the panel
    """

    # Signals
    standard_changed = pyqtSignal(object)
    insight_changed = pyqtSignal(str)
    loading_changed = pyqtSignal(bool)
    close_requested = pyqtSignal()

    def __init__(
        self,
        insight_service: Optional[InsightService] = None,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
    ):
        super().__init__()

        self._insight_service = insight_service
        self._image_base_url = image_base_url

        # State
        self._standard: Optional[Standard] = None
        self._cluster: Optional[ClusterInfo] = None
        self._insight = ""
        self._loading = False

        # Workers stay referenced until their thread has exited
        self._workers: List[InsightWorker] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def standard(self) -> Optional[Standard]:
        return self._standard

    @property
    def cluster(self) -> Optional[ClusterInfo]:
        return self._cluster

    @property
    def insight(self) -> str:
        return self._insight

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def insight_available(self) -> bool:
        return self._insight_service is not None

    @property
    def description_html(self) -> str:
        if self._standard is None:
            return ""
        return prepare_content(self._standard.description, self._image_base_url)

    @property
    def sections(self) -> List[DetailSection]:
        """Optional sections that have content, in display order."""
        if self._standard is None:
            return []
        s = self._standard
        candidates = [
            ("Clarifications", s.clarifications),
            ("Examples", s.examples),
            ("Limitations", s.limitations),
            ("Learning Opportunities", s.learning_opportunities),
        ]
        return [
            DetailSection(title, prepare_content(text, self._image_base_url))
            for title, text in candidates if text
        ]

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def show_standard(self, standard: Optional[Standard], cluster: Optional[ClusterInfo] = None) -> None:
        """Show a standard; any insight for the previous one is dropped."""
        changed = (standard.code if standard else None) != (
            self._standard.code if self._standard else None
        )
        self._standard = standard
        self._cluster = cluster if standard else None

        if changed:
            self._set_insight("")
            self._set_loading(False)
        self._notify_change(self.standard_changed, standard)

    def request_close(self) -> None:
        self._notify_change(self.close_requested)

    def request_insight(self) -> None:
        """Start an insight request for the current standard."""
        if self._standard is None or self._loading:
            return

        if self._insight_service is None:
            logger.warning("Insight requested but no LLM provider is configured")
            self._set_insight(FAILURE_TEXT)
            return

        self._set_loading(True)
        worker = InsightWorker(self._insight_service, self._standard)
        worker.finished.connect(self._on_insight_finished)
        self._workers = [w for w in self._workers if w.isRunning()]
        self._workers.append(worker)
        worker.start()

    def _on_insight_finished(self, code: str, text: str, error: str) -> None:
        # Result for a standard that is no longer shown
        if self._standard is None or self._standard.code != code:
            logger.debug("Discarding stale insight for %s", code)
            return

        self._set_loading(False)
        if error:
            logger.error("Insight for %s failed: %s", code, error)
            self._set_insight(FAILURE_TEXT)
        else:
            self._set_insight(text)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _set_insight(self, text: str) -> None:
        self._update("_insight", text, self.insight_changed)

    def _set_loading(self, loading: bool) -> None:
        self._update("_loading", loading, self.loading_changed)
