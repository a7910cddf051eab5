"""
Layout session - everything that lives for one grade filter.

A session owns the graph built from one working set, the simulation that
places it, the viewport and a cancellation token. Changing the grade closes
the session (cancelling the token) before a new one is opened, so timer
callbacks scheduled by the old session become no-ops instead of writing into
a graph nobody displays any more.
"""

import functools
import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple

from ..config import LayoutSettings, ViewportSettings
from ..domain.models import Standard, GraphNode, GraphEdge
from .force_simulation import ForceSimulation
from .graph_builder import build_graph
from .viewport import ViewportController

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-way flag shared by the session and the callbacks it hands out."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class LayoutSession:
    """
    Graph, simulation and viewport for one working set.

    Usage:
        with LayoutSession(standards, 1200, 800) as session:
            while session.frame(time.monotonic()):
                ...
    """

    def __init__(
        self,
        standards: Iterable[Standard],
        width: float,
        height: float,
        layout_settings: Optional[LayoutSettings] = None,
        viewport_settings: Optional[ViewportSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: int = 0,
    ):
        self._token = CancellationToken()
        self._nodes, self._edges = build_graph(standards)
        self._by_code = {n.code: n for n in self._nodes}

        self._viewport = ViewportController(width, height, viewport_settings)

        # No simulation at all for an empty working set
        self._simulation: Optional[ForceSimulation] = None
        if self._nodes:
            self._simulation = ForceSimulation(
                self._nodes,
                self._edges,
                center=(width / 2, height / 2),
                settings=layout_settings,
                clock=clock,
                seed=seed,
            )
            self._simulation.start()

        logger.info("Layout session opened: %d nodes, %d edges",
                    len(self._nodes), len(self._edges))

    # -------------------------------------------------------------------------
    # Context manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> "LayoutSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Cancel the token, stop the simulation and any viewport animation."""
        if self._token.cancelled:
            return
        self._token.cancel()
        if self._simulation is not None:
            self._simulation.stop()
        self._viewport.cancel()
        logger.debug("Layout session closed")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._token.cancelled

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[GraphEdge]:
        return list(self._edges)

    @property
    def codes(self) -> List[str]:
        return [n.code for n in self._nodes]

    @property
    def simulation(self) -> Optional[ForceSimulation]:
        return self._simulation

    @property
    def viewport(self) -> ViewportController:
        return self._viewport

    @property
    def is_active(self) -> bool:
        """True while the simulation or a viewport animation needs frames."""
        if self.closed:
            return False
        sim_running = self._simulation is not None and self._simulation.is_running
        return sim_running or self._viewport.is_animating

    def has_node(self, code: str) -> bool:
        return code in self._by_code

    def node_position(self, code: str) -> Optional[Tuple[float, float]]:
        node = self._by_code.get(code)
        return node.position if node else None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def frame(self, now: float) -> bool:
        """
        One cooperative frame: a simulation tick plus a viewport step.

        Returns:
            True if another frame is needed
        """
        if self.closed:
            return False

        sim_running = False
        if self._simulation is not None:
            sim_running = self._simulation.tick()
        view_running = self._viewport.advance(now)
        return sim_running or view_running

    def guard(self, callback: Callable) -> Callable:
        """Wrap a callback so it does nothing once this session is closed."""
        token = self._token

        @functools.wraps(callback)
        def guarded(*args, **kwargs):
            if token.cancelled:
                return None
            return callback(*args, **kwargs)

        return guarded

    def focus_on(self, code: str, now: float) -> bool:
        """
        Start the focus animation toward a node's current position.

        The position is read once; the animation does not follow the node if
        the simulation keeps moving it.

        Returns:
            True if an animation was started
        """
        if self.closed:
            return False
        position = self.node_position(code)
        if position is None:
            return False
        self._viewport.focus(position, now)
        return True

    def begin_drag(self, code: str) -> bool:
        if self.closed or self._simulation is None:
            return False
        return self._simulation.begin_drag(code)

    def drag_to(self, code: str, x: float, y: float) -> None:
        if self.closed or self._simulation is None:
            return
        self._simulation.drag_to(code, x, y)

    def end_drag(self, code: str) -> None:
        if self.closed or self._simulation is None:
            return
        self._simulation.end_drag(code)

    def resize(self, width: float, height: float) -> None:
        self._viewport.resize(width, height)
        if self._simulation is not None:
            self._simulation.set_center((width / 2, height / 2))
