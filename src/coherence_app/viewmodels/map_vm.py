"""
Map ViewModel for the coherence map.

Manages:
- Grade filter and the layout session built for it
- Selected standard and search query
- The highlight table derived from selection + search
- Sidebar list of standards

The CoherenceCanvas receives the session and highlight table from this
ViewModel and focuses purely on rendering and pointer input.
"""

import logging
import time
from typing import Callable, List, Optional

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from coherence_core.config import AppConfig
from coherence_core.domain.models import Standard, Relationships
from coherence_core.services.data_loader import StandardsRepository
from coherence_core.services.highlight import HighlightTable, compose_highlights
from coherence_core.services.layout_session import LayoutSession
from coherence_core.services.relationships import resolve_relationships
from coherence_core.services.search import match_codes, filter_standards, normalize_query

logger = logging.getLogger(__name__)


class MapVM(BaseViewModel):
    """
    ViewModel for the map and the standards browser.

    Signals:
        grade_changed: Emitted when the grade filter changes (grade)
        session_changed: Emitted when a new layout session replaces the old one
        selection_changed: Emitted when the selected standard changes (Standard or None)
        query_changed: Emitted when the search query changes (query)
        highlights_changed: Emitted when the highlight table is recomputed
        sidebar_changed: Emitted when the browser list changes
        animation_requested: Emitted when the session has new frames to run

    State:
        grade: Current grade filter ("All" for everything)
        session: LayoutSession for the grade (None before load)
        selected: Selected Standard or None
        query: Raw search text
        highlights: Current HighlightTable
        sidebar_standards: Standards listed in the browser
    """

    # Signals
    grade_changed = pyqtSignal(str)
    session_changed = pyqtSignal()
    selection_changed = pyqtSignal(object)
    query_changed = pyqtSignal(str)
    highlights_changed = pyqtSignal()
    sidebar_changed = pyqtSignal()
    animation_requested = pyqtSignal()

    def __init__(
        self,
        repository: StandardsRepository,
        config: Optional[AppConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the ViewModel.

        Args:
            repository: Source of standards
            config: Layout, viewport and highlight settings
            clock: Time source for animations, injectable for tests
        """
        super().__init__()

        self._repository = repository
        self._config = config or AppConfig()
        self._clock = clock

        # State
        self._grade = self._config.default_grade
        self._grade_standards: List[Standard] = []
        self._session: Optional[LayoutSession] = None
        self._selected: Optional[Standard] = None
        self._relationships = Relationships()
        self._query = ""
        self._search_matches = frozenset()
        self._highlights = HighlightTable()

        self._viewport_size = (1200.0, 800.0)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def grade(self) -> str:
        return self._grade

    @property
    def grades(self) -> List[str]:
        return self._repository.grades()

    @property
    def session(self) -> Optional[LayoutSession]:
        return self._session

    @property
    def grade_standards(self) -> List[Standard]:
        return list(self._grade_standards)

    @property
    def selected(self) -> Optional[Standard]:
        return self._selected

    @property
    def relationships(self) -> Relationships:
        return self._relationships

    @property
    def query(self) -> str:
        return self._query

    @property
    def has_query(self) -> bool:
        return bool(normalize_query(self._query))

    @property
    def highlights(self) -> HighlightTable:
        return self._highlights

    @property
    def sidebar_standards(self) -> List[Standard]:
        return filter_standards(self._query, self._grade_standards)

    @property
    def sidebar_label(self) -> str:
        count = len(self.sidebar_standards)
        return f"{count} Matches" if self.has_query else f"{count} Standards"

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_viewport_size(self, width: float, height: float) -> None:
        """Size used for the next session; the canvas resizes live sessions."""
        self._viewport_size = (float(width), float(height))

    def load(self) -> None:
        """Load the repository and build the session for the current grade."""
        self._repository.load()
        self.set_grade(self._grade, force=True)

    def set_grade(self, grade: str, force: bool = False) -> None:
        """
        Switch the grade filter.

        The old session is closed before the new one is opened so nothing
        from the previous grade can write into the new graph.
        """
        if grade == self._grade and not force:
            return

        self._grade = grade
        self._grade_standards = self._repository.standards_for_grade(grade)

        self.close_session()
        width, height = self._viewport_size
        self._session = LayoutSession(
            self._grade_standards,
            width,
            height,
            layout_settings=self._config.layout,
            viewport_settings=self._config.viewport,
            clock=self._clock,
        )
        logger.info("Grade set to %s (%d standards)", grade, len(self._grade_standards))

        # Selection must belong to the new working set
        if self._selected is not None and not self._session.has_node(self._selected.code):
            self._selected = None
            self._relationships = Relationships()
            self._notify_change(self.selection_changed, None)
        else:
            # Dependents are scanned over the new working set
            self._relationships = resolve_relationships(self._selected, self._grade_standards)

        self._search_matches = match_codes(self._query, self._grade_standards)

        self._notify_change(self.grade_changed, grade)
        self._notify_change(self.session_changed)
        self._notify_change(self.sidebar_changed)
        self._recompute_highlights()

    def close_session(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def select_code(self, code: str) -> None:
        """Select by code; unknown codes clear the selection."""
        standard = next((s for s in reversed(self._grade_standards) if s.code == code), None)
        self.select_standard(standard)

    def select_standard(self, standard: Optional[Standard]) -> None:
        """Select a standard (or None); a newly selected one is focused."""
        same = (
            standard is not None and self._selected is not None
            and standard.code == self._selected.code
        )

        self._selected = standard
        self._relationships = resolve_relationships(standard, self._grade_standards)

        if not same:
            self._notify_change(self.selection_changed, standard)
            self._notify_change(self.sidebar_changed)
        self._recompute_highlights()

        if not same and standard is not None and self._session is not None:
            if self._session.focus_on(standard.code, self._clock()):
                self._notify_change(self.animation_requested)

    def clear_selection(self) -> None:
        self.select_standard(None)

    def set_query(self, query: str) -> None:
        if query == self._query:
            return
        self._query = query
        self._search_matches = match_codes(query, self._grade_standards)
        self._notify_change(self.query_changed, query)
        self._notify_change(self.sidebar_changed)
        self._recompute_highlights()

    def clear_query(self) -> None:
        self.set_query("")

    def shutdown(self) -> None:
        self.close_session()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _recompute_highlights(self) -> None:
        if self._session is None:
            self._highlights = HighlightTable()
        else:
            self._highlights = compose_highlights(
                self._session.codes,
                self._session.edges,
                self._selected.code if self._selected else None,
                self._relationships,
                self._search_matches,
                self._config.highlight,
            )
        self._notify_change(self.highlights_changed)
