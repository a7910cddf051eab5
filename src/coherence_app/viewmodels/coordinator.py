"""
App Coordinator for cross-ViewModel communication.

Handles:
- Map selection → Details panel
- Details close → Map selection cleared
- Grade and search changes → Status bar
"""

from PyQt6.QtCore import QObject, pyqtSignal

from coherence_core.services.data_loader import StandardsRepository

from .map_vm import MapVM
from .details_vm import DetailsVM


class AppCoordinator(QObject):
    """
    Coordinates communication between ViewModels.

    This allows ViewModels to remain decoupled while still responding
    to changes in other ViewModels.
    """

    # Signal emitted when status bar should update
    status_message = pyqtSignal(str, int)  # message, timeout_ms

    def __init__(
        self,
        repository: StandardsRepository,
        map_vm: MapVM,
        details_vm: DetailsVM,
    ):
        super().__init__()

        self._repository = repository
        self._map_vm = map_vm
        self._details_vm = details_vm

        self._connect_signals()

    def _connect_signals(self) -> None:
        """Connect cross-ViewModel signals."""
        self._map_vm.selection_changed.connect(self._on_selection_changed)
        self._map_vm.grade_changed.connect(self._on_grade_changed)
        self._map_vm.query_changed.connect(self._on_query_changed)

        self._details_vm.close_requested.connect(self._map_vm.clear_selection)

    # -------------------------------------------------------------------------
    # Map Handlers
    # -------------------------------------------------------------------------

    def _on_selection_changed(self, standard) -> None:
        cluster = self._repository.find_cluster(standard) if standard else None
        self._details_vm.show_standard(standard, cluster)

    def _on_grade_changed(self, grade: str) -> None:
        count = len(self._map_vm.grade_standards)
        self.status_message.emit(f"{count} Standards In Grade", 0)

    def _on_query_changed(self, query: str) -> None:
        if self._map_vm.has_query:
            count = len(self._map_vm.sidebar_standards)
            self.status_message.emit(f"Filter active: {count} matches", 0)
        else:
            self._on_grade_changed(self._map_vm.grade)
