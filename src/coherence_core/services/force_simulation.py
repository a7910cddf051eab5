"""
Force Simulation - physics-based placement of standard cards.

A cooperative, tick-driven simulation: the caller (a QTimer in the app, a
loop in tests) calls tick() once per frame. Each tick sums four forces into
node velocities, damps them, then integrates positions.

Forces:
1. Link springs pull prerequisite/dependent pairs toward link_distance
2. Many-body repulsion (inverse square) keeps unrelated cards apart
3. Centering shifts the layout centroid onto the viewport center
4. Collision keeps card circles of collision_radius from overlapping

States: UNINITIALIZED -> RUNNING -> SETTLED. A drag pulls a settled
simulation back to RUNNING at a low temperature so only the dragged card's
neighbourhood visibly reacts.
"""

import logging
import math
import random
import time
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..config import LayoutSettings
from ..domain.enums import SimulationState
from ..domain.models import GraphNode, GraphEdge

logger = logging.getLogger(__name__)

TickListener = Callable[["ForceSimulation"], None]

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))  # Golden angle
DISTANCE_MIN_SQ = 1.0


class ForceSimulation:
    """
    Velocity-Verlet style force layout over GraphNodes.

    The simulation is the only writer of node positions while RUNNING. Pinned
    nodes (fx/fy set by a drag) keep their pinned position but still push and
    pull the others.
    """

    def __init__(
        self,
        nodes: Iterable[GraphNode],
        edges: Iterable[GraphEdge],
        center: Tuple[float, float] = (0.0, 0.0),
        settings: Optional[LayoutSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: int = 0,
    ):
        """
        Args:
            nodes: Nodes to lay out (mutated in place)
            edges: Edges between node codes; edges with unknown endpoints are ignored
            center: Point the layout centroid is pulled toward (viewport center)
            settings: Force constants and termination rules
            clock: Wall-clock source in seconds, injectable for tests
            seed: Seed for the jiggle applied to coincident nodes
        """
        self._settings = settings or LayoutSettings()
        self._clock = clock
        self._rng = random.Random(seed)
        self._center = center

        self._nodes: List[GraphNode] = list(nodes)
        self._by_code: Dict[str, GraphNode] = {n.code: n for n in self._nodes}

        # Resolved links (self-loops carry no spring)
        self._links: List[Tuple[GraphNode, GraphNode]] = []
        for edge in edges:
            source = self._by_code.get(edge.source)
            target = self._by_code.get(edge.target)
            if source is None or target is None or source is target:
                continue
            self._links.append((source, target))

        self._link_strengths: List[float] = []
        self._link_biases: List[float] = []
        self._init_links()

        # Cooling state
        self._alpha = 1.0
        self._alpha_target = 0.0
        self._state = SimulationState.UNINITIALIZED
        self._run_started_at: Optional[float] = None
        self._dragging: Set[str] = set()
        self._tick_count = 0
        self._kinetic_energy = 0.0

        self._tick_listeners: List[TickListener] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SimulationState.RUNNING

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def alpha_target(self) -> float:
        return self._alpha_target

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def kinetic_energy(self) -> float:
        """Kinetic energy after the most recent tick."""
        return self._kinetic_energy

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes)

    @property
    def center(self) -> Tuple[float, float]:
        return self._center

    def node(self, code: str) -> Optional[GraphNode]:
        return self._by_code.get(code)

    def on_tick(self, listener: TickListener) -> None:
        """Register a callback invoked after every tick."""
        self._tick_listeners.append(listener)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Place nodes (first call only) and begin running."""
        if self._state == SimulationState.UNINITIALIZED:
            self._initialize_positions()
        self._state = SimulationState.RUNNING
        self._run_started_at = self._clock()
        logger.debug("Simulation started with %d nodes, %d links",
                     len(self._nodes), len(self._links))

    def stop(self) -> None:
        """Settle immediately; no further ticks do anything."""
        if self._state == SimulationState.RUNNING:
            self._settle("stopped")

    def set_center(self, center: Tuple[float, float]) -> None:
        self._center = center

    # -------------------------------------------------------------------------
    # Drag interaction
    # -------------------------------------------------------------------------

    def begin_drag(self, code: str) -> bool:
        """
        Pin a node at its current position and reheat the simulation.

        Returns:
            True if the node exists and has a position
        """
        node = self._by_code.get(code)
        if node is None or node.position is None:
            return False

        node.fx, node.fy = node.x, node.y
        self._dragging.add(code)
        self._alpha_target = self._settings.drag_alpha_target

        if self._state != SimulationState.RUNNING:
            # Low temperature restart: never hotter than the drag target
            self._alpha = min(self._alpha, self._settings.drag_alpha_target)
            self._state = SimulationState.RUNNING
        self._run_started_at = self._clock()
        return True

    def drag_to(self, code: str, x: float, y: float) -> None:
        """Move the pinned position of a dragged node."""
        if code not in self._dragging:
            return
        node = self._by_code[code]
        node.fx, node.fy = x, y

    def end_drag(self, code: str) -> None:
        """Release a dragged node; the simulation becomes settle-eligible again."""
        if code not in self._dragging:
            return
        self._dragging.discard(code)
        node = self._by_code[code]
        node.fx = node.fy = None

        if not self._dragging:
            self._alpha_target = 0.0
            self._run_started_at = self._clock()

    @property
    def is_dragging(self) -> bool:
        return bool(self._dragging)

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self) -> bool:
        """
        Advance one step.

        Returns:
            True if the simulation is still running afterwards
        """
        if self._state != SimulationState.RUNNING:
            return False

        s = self._settings
        self._alpha += (self._alpha_target - self._alpha) * s.alpha_decay

        self._apply_link_force()
        self._apply_charge_force()
        self._apply_center_force()
        self._apply_collision_force()
        self._kinetic_energy = self._integrate()
        self._tick_count += 1

        for listener in list(self._tick_listeners):
            listener(self)

        if not self._dragging:
            if self._alpha < s.alpha_min:
                self._settle("cooled")
            elif self._kinetic_energy < s.energy_threshold:
                self._settle("converged")
            elif self._clock() - self._run_started_at >= s.settle_budget_s:
                self._settle("time budget")

        return self._state == SimulationState.RUNNING

    def run_until_settled(self, max_ticks: int = 10000) -> int:
        """Tick synchronously until settled. Returns the number of ticks run."""
        if self._state == SimulationState.UNINITIALIZED:
            self.start()
        ticks = 0
        while self.is_running and ticks < max_ticks:
            self.tick()
            ticks += 1
        return ticks

    def _settle(self, reason: str) -> None:
        self._state = SimulationState.SETTLED
        logger.debug("Simulation settled (%s) after %d ticks, alpha=%.4f, energy=%.3f",
                     reason, self._tick_count, self._alpha, self._kinetic_energy)

    # -------------------------------------------------------------------------
    # Forces
    # -------------------------------------------------------------------------

    def _jiggle(self) -> float:
        return (self._rng.random() - 0.5) * 1e-6

    def _init_links(self) -> None:
        """Spring strength 1/min(degree) and bias by degree, so hubs move less."""
        degree: Dict[str, int] = {}
        for source, target in self._links:
            degree[source.code] = degree.get(source.code, 0) + 1
            degree[target.code] = degree.get(target.code, 0) + 1

        for source, target in self._links:
            ds, dt = degree[source.code], degree[target.code]
            self._link_strengths.append(1.0 / min(ds, dt))
            self._link_biases.append(ds / (ds + dt))

    def _initialize_positions(self) -> None:
        """Phyllotaxis spiral around the center for nodes without a position."""
        cx, cy = self._center
        for i, node in enumerate(self._nodes):
            if node.x is None or node.y is None:
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = cx + radius * math.cos(angle)
                node.y = cy + radius * math.sin(angle)
            node.vx = node.vy = 0.0

    def _apply_link_force(self) -> None:
        distance = self._settings.link_distance
        alpha = self._alpha

        for (source, target), strength, bias in zip(
            self._links, self._link_strengths, self._link_biases
        ):
            dx = (target.x + target.vx) - (source.x + source.vx) or self._jiggle()
            dy = (target.y + target.vy) - (source.y + source.vy) or self._jiggle()
            dist = math.sqrt(dx * dx + dy * dy)

            # Proportional to deviation from the rest length
            force = (dist - distance) / dist * alpha * strength
            dx *= force
            dy *= force

            target.vx -= dx * bias
            target.vy -= dy * bias
            source.vx += dx * (1 - bias)
            source.vy += dy * (1 - bias)

    def _apply_charge_force(self) -> None:
        strength = self._settings.charge_strength
        alpha = self._alpha

        for node in self._nodes:
            for other in self._nodes:
                if other is node:
                    continue

                dx = other.x - node.x
                dy = other.y - node.y
                if dx == 0:
                    dx = self._jiggle()
                if dy == 0:
                    dy = self._jiggle()
                dist_sq = dx * dx + dy * dy
                if dist_sq < DISTANCE_MIN_SQ:
                    dist_sq = math.sqrt(DISTANCE_MIN_SQ * dist_sq)

                # Negative strength pushes node away from other
                w = strength * alpha / dist_sq
                node.vx += dx * w
                node.vy += dy * w

    def _apply_center_force(self) -> None:
        free = [n for n in self._nodes if not n.is_pinned]
        if not free:
            return

        cx, cy = self._center
        strength = self._settings.center_strength
        sx = (sum(n.x for n in free) / len(free) - cx) * strength
        sy = (sum(n.y for n in free) / len(free) - cy) * strength

        for node in free:
            node.x -= sx
            node.y -= sy

    def _apply_collision_force(self) -> None:
        radius = self._settings.collision_radius
        min_dist = radius * 2
        nodes = self._nodes

        for i, node in enumerate(nodes):
            xi = node.x + node.vx
            yi = node.y + node.vy

            for other in nodes[i + 1:]:
                dx = xi - (other.x + other.vx)
                dy = yi - (other.y + other.vy)
                dist_sq = dx * dx + dy * dy
                if dist_sq >= min_dist * min_dist:
                    continue

                if dx == 0:
                    dx = self._jiggle()
                    dist_sq += dx * dx
                if dy == 0:
                    dy = self._jiggle()
                    dist_sq += dy * dy

                dist = math.sqrt(dist_sq)
                push = (min_dist - dist) / dist
                dx *= push
                dy *= push

                # Equal radii split the correction evenly
                node.vx += dx * 0.5
                node.vy += dy * 0.5
                other.vx -= dx * 0.5
                other.vy -= dy * 0.5

    def _integrate(self) -> float:
        """Damp velocities and move nodes. Returns the kinetic energy of free nodes."""
        damping = 1 - self._settings.velocity_decay
        energy = 0.0

        for node in self._nodes:
            if node.is_pinned:
                node.x, node.y = node.fx, node.fy
                node.vx = node.vy = 0.0
                continue

            node.vx *= damping
            node.vy *= damping
            node.x += node.vx
            node.y += node.vy
            energy += 0.5 * (node.vx * node.vx + node.vy * node.vy)

        return energy
