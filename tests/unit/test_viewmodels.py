"""
Tests for the map and details ViewModels and their coordinator.

Signals are delivered directly, so no QApplication is needed.
"""

import json
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

pytest.importorskip("PyQt6.QtCore")

from coherence_app.viewmodels import MapVM, DetailsVM, AppCoordinator
from coherence_core.domain.enums import HighlightTier
from coherence_core.services.data_loader import StandardsRepository
from coherence_core.services.insight import FAILURE_TEXT


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def loaded_map_vm():
    vm = MapVM(StandardsRepository(), clock=FakeClock())
    vm.load()
    return vm


class TestMapVM:
    """Grade, selection and search state."""

    def test_load_builds_session(self):
        vm = loaded_map_vm()
        assert vm.grade == "Kindergarten"
        assert len(vm.session.codes) == 23
        assert vm.sidebar_label == "23 Standards"
        assert vm.highlights.dimmed_codes() == frozenset()
        vm.shutdown()

    def test_select_code_highlights_neighbours(self):
        vm = loaded_map_vm()
        focused = []
        vm.animation_requested.connect(lambda: focused.append(True))

        vm.select_code("K.CC.5")
        assert vm.selected.code == "K.CC.5"
        assert vm.relationships.prerequisites == frozenset({"K.CC.4"})
        assert vm.relationships.dependents == frozenset({"K.CC.6", "K.OA.1", "K.NBT.1", "K.MD.3"})
        assert vm.highlights.tier_of("K.CC.5") == HighlightTier.SELECTED
        assert vm.highlights.tier_of("K.CC.4") == HighlightTier.PREREQUISITE
        assert vm.highlights.tier_of("K.OA.1") == HighlightTier.DEPENDENT
        assert "K.G.1" in vm.highlights.dimmed_codes()
        assert focused == [True]
        vm.shutdown()

    def test_unknown_code_clears_selection(self):
        vm = loaded_map_vm()
        vm.select_code("K.CC.5")
        vm.select_code("NOPE")
        assert vm.selected is None
        assert vm.highlights.dimmed_codes() == frozenset()
        vm.shutdown()

    def test_query_filters_sidebar(self):
        vm = loaded_map_vm()
        queries = []
        vm.query_changed.connect(queries.append)

        vm.set_query("k.cc")
        assert vm.has_query
        assert len(vm.sidebar_standards) == 7
        assert vm.sidebar_label == "7 Matches"
        assert vm.highlights.tier_of("K.CC.3") == HighlightTier.SEARCH_MATCH

        vm.clear_query()
        assert not vm.has_query
        assert queries == ["k.cc", ""]
        vm.shutdown()

    def test_grade_change_tears_down_session(self):
        vm = loaded_map_vm()
        old = vm.session
        vm.select_code("K.CC.1")
        selections = []
        vm.selection_changed.connect(selections.append)

        vm.set_grade("Grade 1")
        assert old.closed
        assert vm.session is not old
        assert vm.session.simulation is None
        assert vm.selected is None
        assert selections == [None]
        vm.shutdown()
        assert vm.session is None

    def test_same_grade_keeps_session(self):
        vm = loaded_map_vm()
        session = vm.session
        vm.set_grade("Kindergarten")
        assert vm.session is session
        vm.shutdown()

    def test_all_grade_keeps_selection(self):
        vm = loaded_map_vm()
        vm.select_code("K.G.2")
        vm.set_grade("All")
        assert vm.selected.code == "K.G.2"
        vm.shutdown()

    def test_all_grade_finds_dependents_in_other_grades(self, tmp_path):
        path = tmp_path / "two_grades.json"
        path.write_text(json.dumps({"standards": [
            {"Code": "K.A", "Description": "a", "Grade": "Kindergarten"},
            {"Code": "1.B", "Description": "b", "Grade": "Grade 1", "Dependencies": "K.A"},
        ]}), encoding="utf-8")
        vm = MapVM(StandardsRepository(path), clock=FakeClock())
        vm.load()

        vm.select_code("K.A")
        assert vm.relationships.dependents == frozenset()

        vm.set_grade("All")
        assert vm.selected.code == "K.A"
        assert vm.relationships.dependents == frozenset({"1.B"})
        assert vm.highlights.tier_of("1.B") == HighlightTier.DEPENDENT
        assert "1.B" not in vm.highlights.dimmed_codes()
        vm.shutdown()

    def test_reselecting_does_not_refocus(self):
        vm = loaded_map_vm()
        focused = []
        vm.animation_requested.connect(lambda: focused.append(True))

        vm.select_code("K.CC.5")
        vm.session.viewport.pan_by(300, 0)
        vm.select_code("K.CC.5")
        assert focused == [True]
        assert not vm.session.viewport.is_animating
        vm.shutdown()


class TestDetailsVM:
    """Details panel state."""

    def test_show_standard(self):
        repo = StandardsRepository()
        vm = DetailsVM(image_base_url="https://cdn.example.org/")
        changes = []
        vm.standard_changed.connect(changes.append)

        standard = repo.find_standard("K.CC.1")
        vm.show_standard(standard, repo.find_cluster(standard))
        assert vm.standard is standard
        assert vm.cluster.terminology.startswith("Number names")
        assert "Count to 100" in vm.description_html
        assert vm.sections == []
        assert changes == [standard]

    def test_insight_without_service(self):
        vm = DetailsVM()
        vm.show_standard(StandardsRepository().find_standard("K.CC.1"))
        assert not vm.insight_available
        vm.request_insight()
        assert vm.insight == FAILURE_TEXT
        assert not vm.is_loading

    def test_new_standard_clears_insight(self):
        repo = StandardsRepository()
        vm = DetailsVM()
        vm.show_standard(repo.find_standard("K.CC.1"))
        vm.request_insight()
        vm.show_standard(repo.find_standard("K.CC.2"))
        assert vm.insight == ""

    def test_stale_insight_discarded(self):
        repo = StandardsRepository()
        vm = DetailsVM()
        vm.show_standard(repo.find_standard("K.CC.2"))
        vm._on_insight_finished("K.CC.1", "old text", "")
        assert vm.insight == ""


class TestAppCoordinator:
    """Cross-ViewModel wiring."""

    def setup_method(self):
        self.repo = StandardsRepository()
        self.map_vm = MapVM(self.repo, clock=FakeClock())
        self.details_vm = DetailsVM()
        self.coordinator = AppCoordinator(self.repo, self.map_vm, self.details_vm)
        self.messages = []
        self.coordinator.status_message.connect(lambda msg, _t: self.messages.append(msg))
        self.map_vm.load()

    def teardown_method(self):
        self.map_vm.shutdown()

    def test_grade_status(self):
        assert self.messages[-1] == "23 Standards In Grade"

    def test_selection_reaches_details(self):
        self.map_vm.select_code("K.G.6")
        assert self.details_vm.standard.code == "K.G.6"
        assert self.details_vm.cluster.cluster == "Analyze, compare, create, and compose shapes."

    def test_close_clears_selection(self):
        self.map_vm.select_code("K.G.6")
        self.details_vm.request_close()
        assert self.map_vm.selected is None
        assert self.details_vm.standard is None

    def test_filter_status(self):
        self.map_vm.set_query("K.G")
        assert self.messages[-1] == "Filter active: 6 matches"
        self.map_vm.clear_query()
        assert self.messages[-1] == "23 Standards In Grade"
