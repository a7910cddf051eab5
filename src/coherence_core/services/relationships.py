"""
Relationship resolver - prerequisite and dependent sets of a selection.
"""

from typing import Iterable, Optional

from ..domain.models import Standard, Relationships


def resolve_relationships(
    selection: Optional[Standard],
    standards: Iterable[Standard],
) -> Relationships:
    """
    Compute the direct prerequisites and dependents of the selected standard.

    Prerequisites are the selection's own dependency codes, unfiltered; codes
    with no node simply highlight nothing. Dependents come from a full scan,
    which is fine at tens of standards per grade.
    """
    if selection is None:
        return Relationships()

    prerequisites = frozenset(selection.dependencies)
    dependents = frozenset(
        s.code for s in standards
        if selection.code in s.dependencies
    )
    return Relationships(prerequisites=prerequisites, dependents=dependents)
