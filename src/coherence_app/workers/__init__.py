"""
Background worker threads for the Coherence Map.

These QThread subclasses run long operations without blocking the UI.
"""

from .insight_worker import InsightWorker

__all__ = [
    "InsightWorker",
]
