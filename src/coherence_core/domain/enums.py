"""
Enumerations for the Coherence domain.
"""

from enum import Enum


class HighlightTier(str, Enum):
    """Discrete highlight category for a node (first matching rule wins)."""
    SELECTED = "selected"
    PREREQUISITE = "prerequisite"
    DEPENDENT = "dependent"
    SEARCH_MATCH = "search_match"
    PLAIN = "plain"


class EdgeStyle(str, Enum):
    """Connector treatment for an edge."""
    NEUTRAL = "neutral"      # No selection
    INCOMING = "incoming"    # Edge into the selection (from a prerequisite)
    OUTGOING = "outgoing"    # Edge out of the selection (to a dependent)
    MUTED = "muted"          # Unrelated to the selection


class SimulationState(str, Enum):
    """Lifecycle of the force simulation."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    SETTLED = "settled"
