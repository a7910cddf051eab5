"""
Tests for LayoutSession teardown and stale-callback handling.
"""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from coherence_core.domain.enums import SimulationState
from coherence_core.services.data_loader import StandardsRepository
from coherence_core.services.layout_session import LayoutSession, CancellationToken


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def kindergarten():
    return StandardsRepository().standards_for_grade("Kindergarten")


class TestLayoutSession:
    """One session per working set."""

    def test_opens_running(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        assert session.simulation.state == SimulationState.RUNNING
        assert session.is_active
        assert len(session.codes) == 23
        assert len(session.edges) == 26
        assert session.simulation.center == (600.0, 400.0)
        session.close()

    def test_frames_until_settled(self):
        clock = FakeClock()
        with LayoutSession(kindergarten(), 1200, 800, clock=clock) as session:
            frames = 0
            while session.frame(clock.now) and frames < 1000:
                frames += 1
            assert not session.is_active
            assert session.simulation.state == SimulationState.SETTLED

    def test_close_stops_everything(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        session.focus_on("K.CC.1", 0.0)
        session.close()

        assert session.closed
        assert not session.is_active
        assert session.frame(1.0) is False
        assert session.simulation.state == SimulationState.SETTLED
        assert not session.viewport.is_animating

    def test_close_is_idempotent(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        session.close()
        session.close()
        assert session.token.cancelled

    def test_context_manager_closes(self):
        with LayoutSession(kindergarten(), 1200, 800, clock=FakeClock()) as session:
            assert not session.closed
        assert session.closed

    def test_guard_becomes_noop_after_close(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        calls = []

        def record(value):
            calls.append(value)
            return value

        guarded = session.guard(record)
        assert guarded(1) == 1
        session.close()
        assert guarded(2) is None
        assert calls == [1]
        assert guarded.__name__ == "record"

    def test_stale_callback_cannot_touch_new_session(self):
        clock = FakeClock()
        old = LayoutSession(kindergarten(), 1200, 800, clock=clock)
        stale_frame = old.guard(lambda: old.frame(clock.now))
        old.close()

        new = LayoutSession(kindergarten(), 1200, 800, clock=clock)
        before = new.simulation.tick_count
        stale_frame()
        assert new.simulation.tick_count == before
        assert old.simulation.tick_count == 0
        new.close()

    def test_rebuild_gives_fresh_nodes(self):
        clock = FakeClock()
        first = LayoutSession(kindergarten(), 1200, 800, clock=clock)
        first.begin_drag("K.CC.1")
        first.close()

        second = LayoutSession(kindergarten(), 1200, 800, clock=clock)
        node = second.simulation.node("K.CC.1")
        assert node is not first.simulation.node("K.CC.1")
        assert not node.is_pinned
        second.close()

    def test_empty_working_set(self):
        session = LayoutSession([], 1200, 800, clock=FakeClock())
        assert session.simulation is None
        assert session.codes == []
        assert session.frame(0.0) is False
        assert session.begin_drag("K.CC.1") is False
        assert session.focus_on("K.CC.1", 0.0) is False
        session.close()

    def test_focus_on_unknown_code(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        assert session.focus_on("NOPE", 0.0) is False
        assert not session.viewport.is_animating
        session.close()

    def test_focus_on_reads_current_position(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        assert session.focus_on("K.CC.1", 0.0)
        assert session.viewport.is_animating
        px, py = session.node_position("K.CC.1")
        sx, sy = session.viewport.target.apply(px, py)
        assert sx == pytest.approx(600.0)
        assert sy == pytest.approx(400.0)
        session.close()

    def test_drag_after_close_ignored(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        session.close()
        assert session.begin_drag("K.CC.1") is False
        session.drag_to("K.CC.1", 0.0, 0.0)
        assert session.simulation.node("K.CC.1").fx is None

    def test_resize_moves_center(self):
        session = LayoutSession(kindergarten(), 1200, 800, clock=FakeClock())
        session.resize(600, 400)
        assert session.viewport.size == (600, 400)
        assert session.simulation.center == (300.0, 200.0)
        session.close()


class TestCancellationToken:

    def test_one_way(self):
        token = CancellationToken()
        assert not token.cancelled
        token.cancel()
        assert token.cancelled
