"""Category/tag filter predicate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from almanac.search.base_search import Searchable


@dataclass(slots=True, frozen=True)
class SearchFilters:
    """Optional constraints narrowing a query.

    ``category`` is exact, case-sensitive equality. ``tags`` matches when the
    article shares at least one tag with it (OR semantics).
    """

    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def build(
        cls, category: Optional[str] = None, tags: Optional[List[str]] = None
    ) -> "SearchFilters":
        """Build filters from loose inputs, dropping blank values."""
        cleaned = [t.strip() for t in tags or [] if t and t.strip()]
        return cls(category=category or None, tags=cleaned)

    @property
    def is_empty(self) -> bool:
        return not self.category and not self.tags


def matches(document: Searchable, filters: Optional[SearchFilters]) -> bool:
    """Return True if ``document`` passes ``filters``; absent dimensions never exclude."""
    if filters is None:
        return True
    if filters.category and document.category != filters.category:
        return False
    if filters.tags:
        doc_tags = set(document.tags or [])
        if not any(t in doc_tags for t in filters.tags):
            return False
    return True
