"""
Search matcher - case-insensitive code search.
"""

from typing import FrozenSet, Iterable, List

from ..domain.models import Standard


def normalize_query(query: str) -> str:
    """Trim and lowercase a raw query string."""
    return (query or "").strip().lower()


def match_codes(query: str, standards: Iterable[Standard]) -> FrozenSet[str]:
    """
    Codes containing the query as a case-insensitive substring.

    A blank query returns an empty set, which callers treat as "no search
    active" rather than "everything matches".
    """
    q = normalize_query(query)
    if not q:
        return frozenset()
    return frozenset(s.code for s in standards if q in s.code.lower())


def filter_standards(query: str, standards: Iterable[Standard]) -> List[Standard]:
    """
    Standards to list in the browser sidebar, in input order.

    Unlike match_codes, a blank query keeps every standard.
    """
    q = normalize_query(query)
    if not q:
        return list(standards)
    return [s for s in standards if q in s.code.lower()]
