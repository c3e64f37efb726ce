"""Iconify API client.

Thin synchronous wrapper over ``httpx`` for the three endpoints iconsync
needs: search, icon-set fetch and the collection catalogue. Failures are not
retried; they surface as IconApiError.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from iconsync.config import DEFAULT_API_URL
from iconsync.errors import IconApiError, IconSetFormatError
from iconsync.models import CollectionInfo, IconSetDocument, SearchResult

logger = logging.getLogger(__name__)


class IconifyClient:
    """Client for the Iconify HTTP API.

    Parameters
    ----------
    base_url : str
        API root, ``https://api.iconify.design`` by default.
    timeout : float
        Per-request timeout in seconds.
    transport : httpx.BaseTransport | None
        Optional transport override (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> IconifyClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s%s params=%s", self.base_url, path, params)
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise IconApiError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            raise IconApiError(
                f"{path} returned {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise IconApiError(f"{path} returned invalid JSON") from exc

    def search(
        self,
        query: str,
        limit: int = 32,
        prefix: str | None = None,
        category: str | None = None,
    ) -> SearchResult:
        params: dict[str, Any] = {"query": query, "limit": limit}
        if prefix:
            params["prefix"] = prefix
        if category:
            params["category"] = category
        data = self._get_json("/search", params)
        if not isinstance(data, dict):
            raise IconApiError("/search returned an unexpected payload")
        return SearchResult.from_dict(data)

    def fetch_icon_set(self, prefix: str, names: Iterable[str]) -> IconSetDocument:
        """Fetch the subset of collection *prefix* holding *names* (and their aliases)."""
        data = self._get_json(f"/{prefix}.json", {"icons": ",".join(names)})
        # The API answers unknown prefixes with a bare 404 number
        if not isinstance(data, dict):
            raise IconSetFormatError(f"Collection '{prefix}' returned no icon set")
        doc = IconSetDocument.from_dict(data)
        doc.prefix = doc.prefix or prefix
        return doc

    def list_collections(self) -> dict[str, CollectionInfo]:
        data = self._get_json("/collections")
        if not isinstance(data, dict):
            raise IconApiError("/collections returned an unexpected payload")
        return {
            prefix: CollectionInfo.from_dict(prefix, info)
            for prefix, info in data.items()
            if isinstance(info, dict)
        }
