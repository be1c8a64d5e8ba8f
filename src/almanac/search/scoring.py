"""Field-weighted relevance scoring by case-insensitive substring containment.

The same table is used by the server-side fallback and the snapshot engine.
"""

from __future__ import annotations

from typing import Optional

from almanac.search.base_search import Searchable

TITLE_WEIGHT = 10
DESCRIPTION_WEIGHT = 5
TAG_WEIGHT = 3
CATEGORY_WEIGHT = 2
BODY_WEIGHT = 1


def _contains(value: Optional[str], query_lower: str) -> bool:
    return value is not None and query_lower in value.lower()


def score(document: Searchable, query_lower: str) -> int:
    """Additive relevance score; ``query_lower`` must already be lowercased.

    A score of 0 means the document does not match at all.
    """
    total = 0
    if _contains(document.title, query_lower):
        total += TITLE_WEIGHT
    if _contains(document.description, query_lower):
        total += DESCRIPTION_WEIGHT
    if any(_contains(tag, query_lower) for tag in document.tags or []):
        total += TAG_WEIGHT
    if _contains(document.category, query_lower):
        total += CATEGORY_WEIGHT
    if _contains(document.body_text, query_lower):
        total += BODY_WEIGHT
    return total


def matches_query(document: Searchable, query_lower: str) -> bool:
    return score(document, query_lower) > 0
