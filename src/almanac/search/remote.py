"""Remote index adapter: provisioning, full-replace sync and delegated queries.

The adapter owns the external index lifecycle. It never falls back on its
own; `query()` raises `IndexUnavailable` and `SearchService` reruns the
query locally.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from almanac.exceptions import IndexUnavailable
from almanac.search.base_search import IndexClient
from almanac.search.filters import SearchFilters
from almanac.storage.models import Article

logger = logging.getLogger(__name__)

PRIMARY_KEY = "slug"
SEARCHABLE_ATTRIBUTES = ["title", "description", "content", "category", "tags"]
FILTERABLE_ATTRIBUTES = ["category", "tags"]
SORTABLE_ATTRIBUTES = ["date", "title"]


class IndexState(str, Enum):
    UNCONFIGURED = "unconfigured"
    PROVISIONING = "provisioning"
    READY = "ready"
    DEGRADED = "degraded"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_filter(filters: Optional[SearchFilters]) -> Optional[str]:
    """Build a Meilisearch filter expression, e.g.
    ``category = "Tech" AND (tags = "a" OR tags = "b")``.
    """
    if filters is None:
        return None
    parts: List[str] = []
    if filters.category:
        parts.append(f"category = {_quote(filters.category)}")
    if filters.tags:
        clause = " OR ".join(f"tags = {_quote(t)}" for t in filters.tags)
        parts.append(f"({clause})" if len(filters.tags) > 1 else clause)
    return " AND ".join(parts) if parts else None


class RemoteIndexAdapter:
    """Lifecycle owner and query delegate for one named external index."""

    def __init__(
        self,
        client: IndexClient,
        *,
        index_name: str = "encyclopedia",
        limit: int = 50,
        body_chars: int = 5000,
    ) -> None:
        self.client = client
        self.index_name = index_name
        self.limit = limit
        self.body_chars = body_chars
        self.state = IndexState.UNCONFIGURED

    def _degrade(self, action: str, error: IndexUnavailable) -> None:
        self.state = IndexState.DEGRADED
        logger.warning("Search index %s failed for '%s': %s", action, self.index_name, error)

    async def provision(self) -> bool:
        """Create the index if absent and (re)apply its attribute settings.

        Idempotent. Returns False, leaving the adapter degraded, when the
        index cannot be reached.
        """
        self.state = IndexState.PROVISIONING
        try:
            if not await self.client.index_exists(self.index_name):
                logger.info("Creating search index '%s'", self.index_name)
                await self.client.create_index(self.index_name, primary_key=PRIMARY_KEY)
            await self.client.configure_index(
                self.index_name,
                searchable=SEARCHABLE_ATTRIBUTES,
                filterable=FILTERABLE_ATTRIBUTES,
                sortable=SORTABLE_ATTRIBUTES,
            )
        except IndexUnavailable as e:
            self.state = IndexState.DEGRADED
            logger.error("Search index provisioning failed for '%s': %s", self.index_name, e)
            return False
        self.state = IndexState.READY
        return True

    def to_index_document(self, article: Article) -> Dict[str, Any]:
        return {
            "slug": article.slug,
            "title": article.title,
            "description": article.description or "",
            "content": article.content[: self.body_chars],
            "category": article.category or "",
            "tags": list(article.tags or []),
            "date": article.date or "",
            "author": article.author or "",
            "image": article.image or "",
        }

    async def sync(self, articles: Sequence[Article]) -> int:
        """Replace the index contents with every article; returns the count pushed."""
        documents = [self.to_index_document(a) for a in articles]
        try:
            await self.client.replace_documents(
                self.index_name, documents, primary_key=PRIMARY_KEY
            )
        except IndexUnavailable as e:
            self._degrade("sync", e)
            raise
        self.state = IndexState.READY
        logger.info("Synced %d articles to search index '%s'", len(documents), self.index_name)
        return len(documents)

    async def query(self, text: str, filters: Optional[SearchFilters] = None) -> List[str]:
        """Return slugs in the engine's relevance order (at most ``limit``)."""
        try:
            hits = await self.client.search(
                self.index_name, text, filter=build_filter(filters), limit=self.limit
            )
            slugs: List[str] = []
            for hit in hits:
                slug = hit.get(PRIMARY_KEY)
                if not isinstance(slug, str):
                    raise IndexUnavailable(f"Search hit without a string '{PRIMARY_KEY}'")
                slugs.append(slug)
        except IndexUnavailable as e:
            self._degrade("query", e)
            raise
        self.state = IndexState.READY
        return slugs
