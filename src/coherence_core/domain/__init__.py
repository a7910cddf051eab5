"""
Domain models for the Coherence Map.

Contains DTOs, enums, and data structures used throughout the application.
"""

from .models import (
    Standard,
    ClusterInfo,
    GraphNode,
    GraphEdge,
    Relationships,
    ViewTransform,
    IDENTITY,
    parse_dependencies,
)
from .enums import (
    HighlightTier,
    EdgeStyle,
    SimulationState,
)

__all__ = [
    # Models
    "Standard",
    "ClusterInfo",
    "GraphNode",
    "GraphEdge",
    "Relationships",
    "ViewTransform",
    "IDENTITY",
    "parse_dependencies",
    # Enums
    "HighlightTier",
    "EdgeStyle",
    "SimulationState",
]
