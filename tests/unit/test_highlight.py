"""
Tests for the highlight compositor.
"""

from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from coherence_core.config import HighlightSettings
from coherence_core.domain.enums import HighlightTier, EdgeStyle
from coherence_core.domain.models import GraphEdge, Relationships
from coherence_core.services.highlight import compose_highlights, node_tier


CODES = ["A", "B", "C", "D"]
EDGES = [GraphEdge("A", "B"), GraphEdge("B", "C")]
SETTINGS = HighlightSettings()


class TestNodeTier:
    """Precedence of node tiers."""

    def test_selected_beats_everything(self):
        rel = Relationships(prerequisites=frozenset({"A"}))
        assert node_tier("A", "A", rel, frozenset({"A"})) == HighlightTier.SELECTED

    def test_prerequisite_beats_search(self):
        rel = Relationships(prerequisites=frozenset({"A"}))
        assert node_tier("A", "B", rel, frozenset({"A"})) == HighlightTier.PREREQUISITE

    def test_dependent_beats_search(self):
        rel = Relationships(dependents=frozenset({"C"}))
        assert node_tier("C", "B", rel, frozenset({"C"})) == HighlightTier.DEPENDENT

    def test_search_then_plain(self):
        assert node_tier("D", None, Relationships(), frozenset({"D"})) == HighlightTier.SEARCH_MATCH
        assert node_tier("D", None, Relationships(), frozenset()) == HighlightTier.PLAIN


class TestComposeHighlights:
    """Full table for selection and search combinations."""

    def test_chain_selection(self):
        rel = Relationships(prerequisites=frozenset({"A"}), dependents=frozenset({"C"}))
        table = compose_highlights(CODES, EDGES, "B", rel, frozenset())

        assert table.tier_of("A") == HighlightTier.PREREQUISITE
        assert table.tier_of("B") == HighlightTier.SELECTED
        assert table.tier_of("C") == HighlightTier.DEPENDENT
        assert table.tier_of("D") == HighlightTier.PLAIN

        assert table.edges[GraphEdge("A", "B")].style == EdgeStyle.INCOMING
        assert table.edges[GraphEdge("B", "C")].style == EdgeStyle.OUTGOING
        assert table.dimmed_codes() == frozenset({"D"})
        assert table.nodes["D"].opacity == SETTINGS.dim_opacity

    def test_unrelated_edges_muted(self):
        rel = Relationships(dependents=frozenset({"B"}))
        table = compose_highlights(CODES, EDGES, "A", rel, frozenset())

        muted = table.edges[GraphEdge("B", "C")]
        assert muted.style == EdgeStyle.MUTED
        assert muted.opacity == SETTINGS.edge_dim_opacity
        assert not muted.emphasized
        assert table.edges[GraphEdge("A", "B")].emphasized

    def test_no_selection_no_dimming(self):
        table = compose_highlights(CODES, EDGES, None, Relationships(), frozenset({"C"}))
        assert table.dimmed_codes() == frozenset()
        assert all(v.style == EdgeStyle.NEUTRAL for v in table.edges.values())
        assert table.tier_of("C") == HighlightTier.SEARCH_MATCH

    def test_stale_relationships_ignored_without_selection(self):
        rel = Relationships(prerequisites=frozenset({"A"}))
        table = compose_highlights(CODES, EDGES, None, rel, frozenset())
        assert table.tier_of("A") == HighlightTier.PLAIN

    def test_search_match_stays_visible_with_selection(self):
        rel = Relationships(prerequisites=frozenset({"A"}), dependents=frozenset({"C"}))
        table = compose_highlights(CODES, EDGES, "B", rel, frozenset({"D"}))
        assert table.tier_of("D") == HighlightTier.SEARCH_MATCH
        assert table.nodes["D"].opacity == 1.0

    def test_only_search_matches_are_dashed(self):
        rel = Relationships(prerequisites=frozenset({"A"}))
        table = compose_highlights(CODES, EDGES, "B", rel, frozenset({"A", "D"}))
        dashed = {code for code, v in table.nodes.items() if v.dashed}
        assert dashed == {"D"}

    def test_every_node_and_edge_present(self):
        table = compose_highlights(CODES, EDGES, None, Relationships(), frozenset())
        assert set(table.nodes) == set(CODES)
        assert set(table.edges) == set(EDGES)

    def test_codes_with_tier(self):
        rel = Relationships(dependents=frozenset({"B"}))
        table = compose_highlights(CODES, EDGES, "A", rel, frozenset())
        assert table.codes_with_tier(HighlightTier.DEPENDENT) == frozenset({"B"})

    def test_custom_settings(self):
        settings = HighlightSettings(dim_opacity=0.5)
        rel = Relationships()
        table = compose_highlights(CODES, EDGES, "A", rel, frozenset(), settings)
        assert table.nodes["D"].opacity == 0.5
