"""Icon service — search, fetch, recommend and sync icons into a project.

Upstream failures (bad ids, unknown icons, API errors) come back as
``ServiceResult(ok=False, error=...)`` instead of exceptions. Filesystem
errors while writing the managed file are not upstream failures and
propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from iconsync.client import IconifyClient
from iconsync.config import Settings
from iconsync.errors import IconSyncError
from iconsync.models import CodeFlavor, CollectionInfo, HistoryEntry, ResolvedIcon, SearchResult, SyncResult, parse_icon_id
from iconsync.preferences.store import PreferenceStore
from iconsync.ranking import Style, sort_by_learned_preferences, sort_by_preferred_collections
from iconsync.resolver import resolve_icon
from iconsync.sync.managed_file import add_icon_to_file

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Use case keyword -> search terms, first term is used
USE_CASE_TERMS: dict[str, list[str]] = {
    "navigation": ["menu", "hamburger", "bars"],
    "success": ["check", "checkmark", "success", "done"],
    "error": ["error", "alert", "warning", "exclamation"],
    "user": ["user", "person", "account", "profile"],
    "settings": ["settings", "cog", "gear", "preferences"],
    "search": ["search", "magnify", "find"],
    "home": ["home", "house"],
    "close": ["close", "x", "times", "cross"],
    "add": ["add", "plus", "new"],
    "delete": ["delete", "trash", "remove", "bin"],
    "edit": ["edit", "pencil", "pen", "write"],
    "save": ["save", "disk", "floppy"],
    "download": ["download", "arrow-down"],
    "upload": ["upload", "arrow-up"],
    "share": ["share", "send"],
    "like": ["heart", "like", "favorite", "love"],
    "notification": ["bell", "notification", "alert"],
    "email": ["email", "mail", "envelope"],
    "calendar": ["calendar", "date", "schedule"],
    "time": ["clock", "time", "watch"],
    "location": ["location", "map", "pin", "marker"],
    "phone": ["phone", "call", "telephone"],
    "chat": ["chat", "message", "comment", "bubble"],
    "lock": ["lock", "security", "password"],
    "unlock": ["unlock", "open"],
}

MAX_LISTED_COLLECTIONS = 50


@dataclass
class ServiceResult(Generic[T]):
    ok: bool
    value: T | None = None
    error: str = ""

    @classmethod
    def success(cls, value: T) -> ServiceResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ServiceResult[T]:
        return cls(ok=False, error=error)


@dataclass
class Recommendation:
    use_case: str
    search_term: str
    style: str
    icons: list[str]


def search_term_for(use_case: str) -> str:
    lowered = use_case.lower()
    for keyword, terms in USE_CASE_TERMS.items():
        if keyword in lowered:
            return terms[0]
    return use_case


class IconService:
    """Coordinates the API client, the resolver, managed files and preferences."""

    def __init__(
        self,
        client: IconifyClient,
        preferences: PreferenceStore,
        settings: Settings | None = None,
    ) -> None:
        self.client = client
        self.preferences = preferences
        self.settings = settings or Settings()

    @classmethod
    def from_settings(cls, settings: Settings, **client_kwargs: Any) -> IconService:
        client = IconifyClient(settings.api_url, timeout=settings.timeout, **client_kwargs)
        return cls(client, PreferenceStore(settings.preferences_path), settings)

    # -- lookup --------------------------------------------------------------

    def search(
        self,
        query: str,
        limit: int = 32,
        prefix: str | None = None,
        category: str | None = None,
    ) -> ServiceResult[SearchResult]:
        try:
            result = self.client.search(query, limit=limit, prefix=prefix, category=category)
        except IconSyncError as exc:
            return ServiceResult.failure(f"Error searching icons: {exc}")

        learned = self.preferences.get_preferred_collections()
        result.icons = list(sort_by_learned_preferences(result.icons, learned))
        return ServiceResult.success(result)

    def _resolve(self, icon_id: str, size: int | None, color: str | None) -> ResolvedIcon:
        prefix, name = parse_icon_id(icon_id)
        doc = self.client.fetch_icon_set(prefix, [name])
        return resolve_icon(doc, icon_id, size=size, color=color)

    def get_icon(
        self,
        icon_id: str,
        size: int | None = None,
        color: str | None = None,
    ) -> ServiceResult[ResolvedIcon]:
        try:
            icon = self._resolve(icon_id, size, color)
        except IconSyncError as exc:
            return ServiceResult.failure(str(exc))

        self.preferences.track_usage(icon_id.split(":")[0], icon_id)
        return ServiceResult.success(icon)

    def recommend(self, use_case: str, style: Style = "any", limit: int = 10) -> ServiceResult[Recommendation]:
        term = search_term_for(use_case)
        try:
            result = self.client.search(term, limit=limit * 2)
        except IconSyncError as exc:
            return ServiceResult.failure(f"Error searching icons: {exc}")

        learned = self.preferences.get_preferred_collections()
        ranked = sort_by_preferred_collections(result.icons, style, learned)[:limit]
        return ServiceResult.success(Recommendation(use_case=use_case, search_term=term, style=style, icons=ranked))

    def list_collections(
        self,
        category: str | None = None,
        search: str | None = None,
    ) -> ServiceResult[list[CollectionInfo]]:
        try:
            collections = list(self.client.list_collections().values())
        except IconSyncError as exc:
            return ServiceResult.failure(f"Error fetching collections: {exc}")

        if category:
            collections = [c for c in collections if category.lower() in c.category.lower()]
        if search:
            needle = search.lower()
            collections = [c for c in collections if needle in c.prefix.lower() or needle in c.name.lower()]
        collections.sort(key=lambda c: c.total, reverse=True)
        return ServiceResult.success(collections[:MAX_LISTED_COLLECTIONS])

    # -- sync ----------------------------------------------------------------

    def sync_icon(
        self,
        icon_id: str,
        file_path: str | Path | None = None,
        flavor: CodeFlavor | str | None = None,
        custom_name: str | None = None,
        size: int | None = None,
        color: str | None = None,
    ) -> ServiceResult[SyncResult]:
        """Fetch *icon_id*, generate its component and add it to the managed file.

        A component name already taken in the file is a structured failure.
        OSError from writing the managed file propagates.
        """
        path = Path(file_path or self.settings.icons_file)
        try:
            icon = self._resolve(icon_id, size, color)
            result = add_icon_to_file(path, icon_id, icon.svg, flavor or self.settings.default_flavor, custom_name)
        except IconSyncError as exc:
            return ServiceResult.failure(str(exc))

        self.preferences.track_usage(icon_id.split(":")[0], icon_id)
        return ServiceResult.success(result)

    # -- preferences ---------------------------------------------------------

    def recent_icons(self, limit: int = 20) -> list[HistoryEntry]:
        return self.preferences.get_recent_icons(limit)

    def preferred_collections(self) -> list[str]:
        return self.preferences.get_preferred_collections()

    def clear_preferences(self) -> None:
        self.preferences.clear()

    def close(self) -> None:
        self.client.close()
