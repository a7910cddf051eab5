"""
Services - graph layout, highlighting and data access for the Coherence Map.
"""

from .graph_builder import build_graph
from .force_simulation import ForceSimulation
from .relationships import resolve_relationships
from .search import match_codes, filter_standards, normalize_query
from .highlight import (
    compose_highlights,
    node_tier,
    HighlightTable,
    NodeVisual,
    EdgeVisual,
)
from .viewport import ViewportController, Transition, ease_cubic_in_out
from .layout_session import LayoutSession, CancellationToken
from .data_loader import StandardsRepository, ALL_GRADES
from .rich_text import transform_content, prepare_content
from .insight import InsightService, FAILURE_TEXT, NO_INSIGHT_TEXT

__all__ = [
    "build_graph",
    "ForceSimulation",
    "resolve_relationships",
    "match_codes",
    "filter_standards",
    "normalize_query",
    "compose_highlights",
    "node_tier",
    "HighlightTable",
    "NodeVisual",
    "EdgeVisual",
    "ViewportController",
    "Transition",
    "ease_cubic_in_out",
    "LayoutSession",
    "CancellationToken",
    "StandardsRepository",
    "ALL_GRADES",
    "transform_content",
    "prepare_content",
    "InsightService",
    "FAILURE_TEXT",
    "NO_INSIGHT_TEXT",
]
