"""Search tools for FastMCP.

`search_articles` is the query interface consumed by page renderers; the
maintenance tools wrap index initialisation and snapshot export.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

from fastmcp import FastMCP

from almanac.exceptions import SourceUnavailable
from almanac.search.filters import SearchFilters
from almanac.snapshot import export_snapshot as build_snapshot
from almanac.snapshot import write_snapshot


def _split_tags(val: Any) -> List[str]:
    if isinstance(val, str):
        return [p.strip() for p in val.split(",") if p and p.strip()]
    if isinstance(val, list):
        return [str(p).strip() for p in val if str(p).strip()]
    return []


def register_search_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register search tools on the given FastMCP instance.

    The `get_state` callable should return an object with a `search_service`
    (see `almanac.search.service.SearchService`) and `settings`.
    """

    def _service(state: Any) -> Any:
        if state is None or getattr(state, "search_service", None) is None:
            raise RuntimeError("Search service is not initialized.")
        return state.search_service

    @mcp.tool
    async def search_articles(
        query: str,
        category: Optional[str] = None,
        tags: Optional[Union[str, List[str]]] = None,
    ) -> List[Dict[str, Any]]:
        """Search articles by free text with optional filters.

        Parameters
        ----------
        query: str
            Free text; matched case-insensitively against title, description,
            tags, category and body. Blank queries return no results.
        category: str | None
            Exact category name to restrict to.
        tags: list[str] | str | None
            Return only articles carrying at least one of these tags; a
            comma-separated string such as "AI,ml" is also accepted.
        """
        if not query or not query.strip():
            return []
        service = _service(get_state())
        filters = SearchFilters.build(category=category, tags=_split_tags(tags))
        return await service.search_records(query, filters)

    @mcp.tool
    async def init_search_index() -> Dict[str, Any]:
        """Provision the external search index and sync all articles into it."""
        state = get_state()
        service = _service(state)
        ok = await service.initialize_index()
        adapter = getattr(service, "adapter", None)
        return {
            "ok": ok,
            "state": adapter.state.value if adapter is not None else "disabled",
        }

    @mcp.tool
    async def export_snapshot(path: Optional[str] = None) -> Dict[str, Any]:
        """Write the client-side articles snapshot (default: configured path)."""
        state = get_state()
        service = _service(state)
        cfg = state.settings.snapshot
        try:
            entries = build_snapshot(
                service.store.articles(), preview_chars=cfg.preview_chars
            )
        except SourceUnavailable as e:
            raise RuntimeError(f"Cannot export snapshot: {e}") from e
        target = write_snapshot(entries, path or cfg.path)
        return {"path": str(target), "count": len(entries)}
