"""Meilisearch index client over the REST API via httpx.

Every transport, HTTP-status or payload problem is raised as
`IndexUnavailable` so callers have a single failure to fall back on.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from almanac.exceptions import IndexUnavailable
from almanac.search.base_search import IndexClient


class MeilisearchClient(IndexClient):
    def __init__(
        self,
        *,
        host: str = "http://127.0.0.1:7700",
        api_key: Optional[str] = None,
        timeout: float = 5.0,
    ) -> None:
        self.host = host.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return httpx.AsyncClient(base_url=self.host, timeout=self.timeout, headers=headers)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        allow_404: bool = False,
    ) -> Optional[Any]:
        try:
            async with self._client() as client:
                resp = await client.request(method, path, json=json, params=params)
                if allow_404 and resp.status_code == 404:
                    return None
                resp.raise_for_status()
                if not resp.content:
                    return {}
                return resp.json()
        except httpx.HTTPStatusError as e:
            raise IndexUnavailable(
                f"Meilisearch {method} {path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise IndexUnavailable(f"Meilisearch {method} {path} failed: {e}") from e
        except ValueError as e:
            # resp.json() on a non-JSON body
            raise IndexUnavailable(f"Meilisearch {method} {path} returned invalid JSON") from e

    async def index_exists(self, name: str) -> bool:
        data = await self._request("GET", f"/indexes/{name}", allow_404=True)
        return data is not None

    async def create_index(self, name: str, *, primary_key: str) -> None:
        await self._request("POST", "/indexes", json={"uid": name, "primaryKey": primary_key})

    async def configure_index(
        self,
        name: str,
        *,
        searchable: Sequence[str],
        filterable: Sequence[str],
        sortable: Sequence[str],
    ) -> None:
        base = f"/indexes/{name}/settings"
        await self._request("PUT", f"{base}/searchable-attributes", json=list(searchable))
        await self._request("PUT", f"{base}/filterable-attributes", json=list(filterable))
        await self._request("PUT", f"{base}/sortable-attributes", json=list(sortable))

    async def replace_documents(
        self, name: str, documents: Iterable[Dict[str, Any]], *, primary_key: str
    ) -> None:
        # Meilisearch processes tasks per index in enqueue order, so the delete
        # lands before the add.
        await self._request("DELETE", f"/indexes/{name}/documents")
        docs = list(documents)
        if docs:
            await self._request(
                "POST",
                f"/indexes/{name}/documents",
                json=docs,
                params={"primaryKey": primary_key},
            )

    async def search(
        self, name: str, query: str, *, filter: Optional[str] = None, limit: int = 50
    ) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {"q": query, "limit": int(limit)}
        if filter:
            payload["filter"] = filter
        data = await self._request("POST", f"/indexes/{name}/search", json=payload)
        hits = data.get("hits") if isinstance(data, dict) else None
        if not isinstance(hits, list):
            raise IndexUnavailable("Meilisearch search response has no 'hits' list")
        return [h for h in hits if isinstance(h, dict)]
