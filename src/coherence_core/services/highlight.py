"""
Highlight compositor - maps selection, relationships and search matches to
per-node and per-edge visual attributes.

The result is a plain table; the Qt scene applies it to its items. Nothing
here reads or writes node positions.

Node tiers (first matching rule wins):
    1. selected code            -> SELECTED
    2. in prerequisites         -> PREREQUISITE
    3. in dependents            -> DEPENDENT
    4. in search matches        -> SEARCH_MATCH
    5. otherwise                -> PLAIN

Dimming is independent of tier: with a selection, anything that is neither
related nor a search match drops to the dim opacity. Search alone never dims.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional

from ..config import HighlightSettings
from ..domain.enums import HighlightTier, EdgeStyle
from ..domain.models import GraphEdge, Relationships


@dataclass(frozen=True)
class NodeVisual:
    """Visual state of one node card."""
    tier: HighlightTier
    opacity: float
    stroke_width: float
    dashed: bool = False


@dataclass(frozen=True)
class EdgeVisual:
    """Visual state of one connector."""
    style: EdgeStyle
    opacity: float
    width: float

    @property
    def emphasized(self) -> bool:
        return self.style in (EdgeStyle.INCOMING, EdgeStyle.OUTGOING)


@dataclass
class HighlightTable:
    """Visual attributes for every node (by code) and every edge."""
    nodes: Dict[str, NodeVisual] = field(default_factory=dict)
    edges: Dict[GraphEdge, EdgeVisual] = field(default_factory=dict)

    def tier_of(self, code: str) -> Optional[HighlightTier]:
        visual = self.nodes.get(code)
        return visual.tier if visual else None

    def codes_with_tier(self, tier: HighlightTier) -> FrozenSet[str]:
        return frozenset(code for code, v in self.nodes.items() if v.tier == tier)

    def dimmed_codes(self) -> FrozenSet[str]:
        return frozenset(code for code, v in self.nodes.items() if v.opacity < 1.0)


def node_tier(
    code: str,
    selection_code: Optional[str],
    relationships: Relationships,
    search_matches: FrozenSet[str],
) -> HighlightTier:
    """Apply the precedence table to a single node."""
    if selection_code is not None and code == selection_code:
        return HighlightTier.SELECTED
    if code in relationships.prerequisites:
        return HighlightTier.PREREQUISITE
    if code in relationships.dependents:
        return HighlightTier.DEPENDENT
    if code in search_matches:
        return HighlightTier.SEARCH_MATCH
    return HighlightTier.PLAIN


def compose_highlights(
    codes: Iterable[str],
    edges: Iterable[GraphEdge],
    selection_code: Optional[str],
    relationships: Relationships,
    search_matches: FrozenSet[str],
    settings: Optional[HighlightSettings] = None,
) -> HighlightTable:
    """
    Build the highlight table for the current state.

    Args:
        codes: Node codes in the working set
        edges: Edges in the working set
        selection_code: Code of the selected standard, or None
        relationships: Output of resolve_relationships for that selection
        search_matches: Output of match_codes for the current query
        settings: Opacities and line weights

    Returns:
        HighlightTable keyed by node code and by edge
    """
    s = settings or HighlightSettings()
    table = HighlightTable()

    # Without a selection, relationship sets are ignored even if stale
    if selection_code is None:
        relationships = Relationships()

    stroke_for_tier = {
        HighlightTier.SELECTED: s.selected_stroke,
        HighlightTier.PREREQUISITE: s.related_stroke,
        HighlightTier.DEPENDENT: s.related_stroke,
        HighlightTier.SEARCH_MATCH: s.search_stroke,
        HighlightTier.PLAIN: s.plain_stroke,
    }

    for code in codes:
        tier = node_tier(code, selection_code, relationships, search_matches)

        if selection_code is None:
            opacity = 1.0
        else:
            visible = tier in (
                HighlightTier.SELECTED,
                HighlightTier.PREREQUISITE,
                HighlightTier.DEPENDENT,
            ) or code in search_matches
            opacity = 1.0 if visible else s.dim_opacity

        table.nodes[code] = NodeVisual(
            tier=tier,
            opacity=opacity,
            stroke_width=stroke_for_tier[tier],
            dashed=(tier == HighlightTier.SEARCH_MATCH),
        )

    for edge in edges:
        if selection_code is None:
            visual = EdgeVisual(EdgeStyle.NEUTRAL, 1.0, s.edge_neutral_width)
        elif edge.target == selection_code:
            visual = EdgeVisual(EdgeStyle.INCOMING, 1.0, s.edge_related_width)
        elif edge.source == selection_code:
            visual = EdgeVisual(EdgeStyle.OUTGOING, 1.0, s.edge_related_width)
        else:
            visual = EdgeVisual(EdgeStyle.MUTED, s.edge_dim_opacity, s.edge_muted_width)
        table.edges[edge] = visual

    return table
