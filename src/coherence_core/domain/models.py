"""
Domain models (DTOs) for the Coherence Map.

These are pure data classes with no Qt, network or filesystem dependencies.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, FrozenSet, Dict, Any


def parse_dependencies(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a '|' delimited dependency string into trimmed codes."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split("|") if part.strip())


@dataclass(frozen=True)
class Standard:
    """One curriculum standard, identified by its code."""
    code: str
    description: str
    domain: str = ""
    grade: str = ""
    cluster: str = ""
    clarifications: Optional[str] = None
    examples: Optional[str] = None
    limitations: Optional[str] = None
    learning_opportunities: Optional[str] = None
    dependencies: Tuple[str, ...] = ()   # Prerequisite codes, in source order

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Standard":
        """Create from a source record (keys as in the published data files)."""
        deps = d.get("Dependencies")
        if isinstance(deps, (list, tuple)):
            dependencies = tuple(str(c).strip() for c in deps if str(c).strip())
        else:
            dependencies = parse_dependencies(deps)

        return cls(
            code=str(d["Code"]).strip(),
            description=d.get("Description", ""),
            domain=d.get("Domain", ""),
            grade=d.get("Grade", ""),
            cluster=d.get("Cluster", ""),
            clarifications=d.get("Clarifications") or None,
            examples=d.get("Examples") or None,
            limitations=d.get("Limitations") or None,
            learning_opportunities=d.get("StudentLearningOpportunities") or None,
            dependencies=dependencies,
        )

    def short_description(self, limit: int = 25) -> str:
        """Description truncated for a node card."""
        if len(self.description) > limit:
            return self.description[:limit - 3] + "..."
        return self.description


@dataclass(frozen=True)
class ClusterInfo:
    """Context shared by the standards of one cluster."""
    cluster: str
    grade: str
    clarifications: Optional[str] = None
    limitations: Optional[str] = None
    terminology: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ClusterInfo":
        return cls(
            cluster=d["Cluster"],
            grade=d.get("Grade", ""),
            clarifications=d.get("Clarifications") or None,
            limitations=d.get("Limitations") or None,
            terminology=d.get("Terminology") or None,
        )


@dataclass(eq=False)
class GraphNode:
    """A standard placed in the layout. Mutated only by the simulation and drag pinning."""
    standard: Standard

    # Position (None until the simulation places the node)
    x: Optional[float] = None
    y: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0

    # Pinned position while being dragged
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def code(self) -> str:
        return self.standard.code

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None and self.fy is not None


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge: target depends on source (source is a prerequisite)."""
    source: str
    target: str


@dataclass(frozen=True)
class Relationships:
    """Prerequisite and dependent codes of the current selection."""
    prerequisites: FrozenSet[str] = field(default_factory=frozenset)
    dependents: FrozenSet[str] = field(default_factory=frozenset)

    def is_related(self, code: str) -> bool:
        return code in self.prerequisites or code in self.dependents


@dataclass(frozen=True)
class ViewTransform:
    """Pan offset (x, y) and scale k; screen = scene * k + offset."""
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def apply(self, px: float, py: float) -> Tuple[float, float]:
        """Scene -> screen coordinates."""
        return (px * self.k + self.x, py * self.k + self.y)

    def invert(self, sx: float, sy: float) -> Tuple[float, float]:
        """Screen -> scene coordinates."""
        return ((sx - self.x) / self.k, (sy - self.y) / self.k)

    def interpolate(self, other: "ViewTransform", t: float) -> "ViewTransform":
        """Linear blend toward another transform (t in [0, 1])."""
        return ViewTransform(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
            k=self.k + (other.k - self.k) * t,
        )


IDENTITY = ViewTransform()
