"""
Graph builder - turns a flat standards list into nodes and directed edges.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from ..domain.models import Standard, GraphNode, GraphEdge

logger = logging.getLogger(__name__)


def build_graph(standards: Iterable[Standard]) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """
    Build nodes and edges for one working set.

    Each dependency code is resolved against the working set; references to
    codes outside it (other grades, typos) are dropped from the graph but left
    untouched on the Standard. Duplicate codes resolve last-write-wins.

    Args:
        standards: Standards in the current grade filter

    Returns:
        (nodes, edges) - one node per distinct code, edges as prerequisite -> dependent
    """
    # code -> standard, built once so every dependency check is O(1)
    by_code: Dict[str, Standard] = {}
    for standard in standards:
        if standard.code in by_code:
            logger.warning("Duplicate standard code %s; keeping the later entry", standard.code)
        by_code[standard.code] = standard

    nodes = [GraphNode(standard=s) for s in by_code.values()]

    edges: List[GraphEdge] = []
    seen = set()
    for standard in by_code.values():
        for dep_code in standard.dependencies:
            if dep_code not in by_code:
                logger.debug("Dropping edge %s -> %s (not in working set)", dep_code, standard.code)
                continue
            edge = GraphEdge(source=dep_code, target=standard.code)
            if edge not in seen:
                seen.add(edge)
                edges.append(edge)

    return nodes, edges
