"""Article browsing tools for FastMCP."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from fastmcp import FastMCP

from almanac.exceptions import SourceUnavailable
from almanac.storage.models import Article

logger = logging.getLogger(__name__)


def _serialize_article(article: Article) -> Dict[str, Any]:
    return {
        "slug": article.slug,
        "title": article.title,
        "description": article.description,
        "category": article.category,
        "tags": list(article.tags),
        "date": article.date,
        "author": article.author,
        "image": article.image,
    }


def register_article_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register article tools; `get_state()` must expose a `store` (DocumentStore)."""

    def _store(state: Any) -> Any:
        if state is None or getattr(state, "store", None) is None:
            raise RuntimeError("Document store is not initialized.")
        return state.store

    @mcp.tool
    def get_article(slug: str) -> Dict[str, Any]:
        """Return one article's metadata, sanitized HTML and heading outline."""
        store = _store(get_state())
        try:
            article = store.get(slug)
            rendered = store.render(slug) if article is not None else None
        except SourceUnavailable as e:
            raise RuntimeError(f"Content source unavailable: {e}") from e
        if article is None or rendered is None:
            raise ValueError(f"Article not found: '{slug}'")
        out = _serialize_article(article)
        out["html"] = rendered.metadata.get("html", "")
        out["sections"] = [
            {"title": s.title, "level": s.level, "anchor": s.anchor} for s in rendered.sections
        ]
        return out

    @mcp.tool
    def list_categories() -> List[str]:
        """List unique article categories."""
        store = _store(get_state())
        try:
            return store.categories()
        except SourceUnavailable as e:
            logger.error("Content source unavailable: %s", e)
            return []

    @mcp.tool
    def articles_by_category(category: str) -> List[Dict[str, Any]]:
        """List articles in a category (exact, case-sensitive match)."""
        store = _store(get_state())
        try:
            return [_serialize_article(a) for a in store.by_category(category)]
        except SourceUnavailable as e:
            logger.error("Content source unavailable: %s", e)
            return []
