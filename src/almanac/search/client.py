"""Disconnected-mode search over a loaded snapshot.

`ClientSearchState` is the explicit application state a UI owns: it loads the
snapshot once and is passed into every search. `Debouncer` models the
search-as-you-type scheduling (one pending call per input burst).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from almanac.exceptions import SourceUnavailable
from almanac.search.filters import SearchFilters
from almanac.search.local import local_search
from almanac.snapshot import SnapshotArticle, load_snapshot, parse_snapshot

logger = logging.getLogger(__name__)


class ClientSearchState:
    """Holds the snapshot entries a client searches against."""

    def __init__(self, entries: Optional[List[SnapshotArticle]] = None) -> None:
        self.entries: List[SnapshotArticle] = list(entries or [])
        self.loaded = entries is not None

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout)

    def load_from_path(self, path: str | Path) -> int:
        self.entries = load_snapshot(path)
        self.loaded = True
        return len(self.entries)

    async def load_from_url(self, url: str, *, timeout: float = 10.0) -> int:
        """Fetch the snapshot over HTTP.

        On failure the state stays empty and the error is logged; searches
        then return no results.
        """
        try:
            async with self._client(timeout) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                self.entries = parse_snapshot(resp.content)
        except (httpx.HTTPError, SourceUnavailable) as e:
            logger.error("Failed to load articles snapshot from %s: %s", url, e)
            self.entries = []
        self.loaded = True
        return len(self.entries)

    def search(
        self, query: str, filters: Optional[SearchFilters] = None
    ) -> List[SnapshotArticle]:
        return local_search(self.entries, query, filters)

    def suggest(self, query: str, *, limit: int = 10) -> List[Dict[str, Any]]:
        """Autocomplete records for the top ``limit`` matches."""
        return [e.to_record() for e in self.search(query)[: max(0, int(limit))]]


class Debouncer:
    """Run at most one pending call per burst, firing after ``delay`` seconds.

    Calling `schedule()` again before the delay elapses cancels the pending
    call and starts a new wait.
    """

    def __init__(self, delay: float = 0.3) -> None:
        self.delay = delay
        self._pending: Optional[asyncio.Task[Any]] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def schedule(self, fn: Callable[[], Awaitable[Any]]) -> asyncio.Task[Any]:
        self.cancel()

        async def _run() -> Any:
            await asyncio.sleep(self.delay)
            return await fn()

        self._pending = asyncio.ensure_future(_run())
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
