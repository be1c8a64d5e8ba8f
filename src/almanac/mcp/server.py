"""Almanac MCP server entrypoint using FastMCP.

Exposes article search and browsing tools over the document store.
Run with:
  - almanac-mcp
  - or: python -m almanac.mcp.server (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

from typing import Optional

from fastmcp import FastMCP

from almanac.config import Settings, load_settings
from almanac.log import setup_logging
from almanac.mcp.tools import register_article_tools, register_search_tools
from almanac.search.meilisearch import MeilisearchClient
from almanac.search.remote import RemoteIndexAdapter
from almanac.search.service import SearchService
from almanac.storage.document_store import DocumentStore


class AppState:
    """Application state shared by MCP tools."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store: Optional[DocumentStore] = None
        self.adapter: Optional[RemoteIndexAdapter] = None
        self.search_service: Optional[SearchService] = None

    def init_services(self) -> None:
        """Build the document store, index adapter and search service from configuration."""
        ccfg = self.settings.content
        self.store = DocumentStore(ccfg.directory, extensions=ccfg.extensions)

        icfg = self.settings.search_index
        if icfg.enabled:
            client = MeilisearchClient(host=icfg.host, api_key=icfg.api_key, timeout=icfg.timeout)
            self.adapter = RemoteIndexAdapter(
                client,
                index_name=icfg.index_name,
                limit=icfg.limit,
                body_chars=icfg.body_chars,
            )
        else:
            self.adapter = None
        self.search_service = SearchService(self.store, self.adapter)


# Global state and server instance
_state: Optional[AppState] = None
mcp = FastMCP("Almanac MCP Server")


# ----- Tools -----

@mcp.tool
def health() -> str:
    """Simple health check tool."""
    return "ok"


# ----- Entrypoint -----

def main() -> None:
    """Initialize state and run the MCP server."""
    global _state
    settings = load_settings()
    setup_logging(settings.app.log_level)
    _state = AppState(settings)
    _state.init_services()
    register_search_tools(mcp, get_state=lambda: _state)
    register_article_tools(mcp, get_state=lambda: _state)
    # Choose transport based on configuration: stdio (default), http, or sse
    transport = settings.app.transport
    if transport in ("http", "sse"):
        mcp.run(transport=transport, host=settings.app.host, port=settings.app.port)
    else:
        mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
