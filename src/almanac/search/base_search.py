"""Abstract search interfaces.

`Searchable` is the minimal shape the local engine scores (full articles and
snapshot entries both satisfy it). `IndexClient` is the capability the remote
adapter depends on, so tests can substitute a failing or empty backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence


class Searchable(Protocol):
    """Minimal protocol for items the local engine can filter and score."""

    slug: str
    title: str
    description: Optional[str]
    category: Optional[str]
    tags: List[str]

    @property
    def body_text(self) -> str: ...


class IndexClient(ABC):
    """Abstract interface for an external full-text index.

    Implementations raise `almanac.exceptions.IndexUnavailable` for any
    network, HTTP or payload failure.
    """

    @abstractmethod
    async def index_exists(self, name: str) -> bool:
        """Return True if the named index exists."""

    @abstractmethod
    async def create_index(self, name: str, *, primary_key: str) -> None:
        """Create the named index."""

    @abstractmethod
    async def configure_index(
        self,
        name: str,
        *,
        searchable: Sequence[str],
        filterable: Sequence[str],
        sortable: Sequence[str],
    ) -> None:
        """Set searchable, filterable and sortable attributes."""

    @abstractmethod
    async def replace_documents(
        self, name: str, documents: Iterable[Dict[str, Any]], *, primary_key: str
    ) -> None:
        """Replace the index contents with ``documents``."""

    @abstractmethod
    async def search(
        self, name: str, query: str, *, filter: Optional[str] = None, limit: int = 50
    ) -> List[Dict[str, Any]]:
        """Execute a query and return ranked hits (dicts with at least the primary key)."""
        raise NotImplementedError
