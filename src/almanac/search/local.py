"""Local scan-filter-sort search engine.

Used as the server fallback over full articles and as the disconnected
engine over snapshot entries.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar

from almanac.search.base_search import Searchable
from almanac.search.filters import SearchFilters, matches
from almanac.search.scoring import score

S = TypeVar("S", bound=Searchable)


def local_search(
    documents: Sequence[S], query: str, filters: Optional[SearchFilters] = None
) -> List[S]:
    """Return documents matching ``query`` and ``filters``, most relevant first.

    Blank queries return an empty list. Ties keep the input order; no result
    cap is applied.
    """
    if not query or not query.strip():
        return []

    query_lower = query.lower()
    scored = []
    for doc in documents:
        if not matches(doc, filters):
            continue
        s = score(doc, query_lower)
        if s > 0:
            scored.append((s, doc))

    # sorted() is stable, so equal scores keep store order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
    return [doc for _, doc in scored]
