"""Tool registration modules for the Almanac MCP server."""

from .articles import register_article_tools
from .search import register_search_tools

__all__ = [
    "register_article_tools",
    "register_search_tools",
]
