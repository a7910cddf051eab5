"""
Coherence Core - Headless library for exploring curriculum standard graphs.

This module provides the graph model, force layout, highlighting and viewport
logic behind the Coherence Map. It has no UI dependencies and can be embedded
in other applications.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "StandardsRepository":
        from .services.data_loader import StandardsRepository
        return StandardsRepository
    elif name == "LayoutSession":
        from .services.layout_session import LayoutSession
        return LayoutSession
    elif name == "ForceSimulation":
        from .services.force_simulation import ForceSimulation
        return ForceSimulation
    elif name == "InsightService":
        from .services.insight import InsightService
        return InsightService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "StandardsRepository",
    "LayoutSession",
    "ForceSimulation",
    "InsightService",
]
