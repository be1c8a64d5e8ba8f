"""Search entry point combining the remote index with the local fallback.

Each call independently tries the remote index once; any `IndexUnavailable`
reruns the query through `local_search` over the full document store. There
is no retry and no persistent circuit breaker.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from almanac.exceptions import IndexUnavailable, SourceUnavailable, StaleReference
from almanac.search.filters import SearchFilters
from almanac.search.local import local_search
from almanac.search.remote import RemoteIndexAdapter
from almanac.storage.document_store import DocumentStore
from almanac.storage.models import Article

logger = logging.getLogger(__name__)


def _resolve(slug: str, by_slug: Dict[str, Article]) -> Article:
    article = by_slug.get(slug)
    if article is None:
        raise StaleReference(slug)
    return article


def _hydrate(slugs: List[str], articles: List[Article]) -> List[Article]:
    by_slug = {a.slug: a for a in articles}
    out: List[Article] = []
    for slug in slugs:
        try:
            out.append(_resolve(slug, by_slug))
        except StaleReference as e:
            logger.debug("Dropping stale index entry '%s'", e.slug)
    return out


class SearchService:
    """Answers queries from the remote index when available, else locally."""

    def __init__(
        self, store: DocumentStore, adapter: Optional[RemoteIndexAdapter] = None
    ) -> None:
        self.store = store
        self.adapter = adapter

    async def _search(self, text: str, filters: Optional[SearchFilters]) -> List[Article]:
        # First use parses every file; keep that off the event loop
        articles = await asyncio.to_thread(self.store.articles)
        if self.adapter is not None:
            try:
                slugs = await self.adapter.query(text, filters)
            except IndexUnavailable as e:
                logger.warning("Search index unavailable, using local search: %s", e)
            else:
                return _hydrate(slugs, articles)
        return local_search(articles, text, filters)

    async def search(
        self, text: str, filters: Optional[SearchFilters] = None
    ) -> List[Article]:
        """Return matching articles, most relevant first.

        Blank text returns ``[]`` without touching any backend. An unreadable
        content source is logged and degrades to ``[]``.
        """
        if not text or not text.strip():
            return []
        try:
            return await self._search(text, filters)
        except SourceUnavailable as e:
            logger.error("Content source unavailable during search: %s", e)
            return []

    async def search_records(
        self, text: str, filters: Optional[SearchFilters] = None
    ) -> List[Dict[str, Any]]:
        """Search and project results to ``{slug, title, description, category}``."""
        return [a.to_record() for a in await self.search(text, filters)]

    async def initialize_index(self) -> bool:
        """Provision the remote index and sync every article into it."""
        if self.adapter is None:
            logger.info("Search index disabled; nothing to initialize")
            return False
        if not await self.adapter.provision():
            return False
        try:
            await self.adapter.sync(await asyncio.to_thread(self.store.articles))
        except IndexUnavailable:
            return False
        return True
