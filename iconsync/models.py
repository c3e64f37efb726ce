"""Core data models — icon sets, managed-file entries, preferences, search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from iconsync.errors import IconSetFormatError, InvalidIconIdError

MAX_HISTORY_SIZE = 50


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_icon_id(icon_id: str) -> tuple[str, str]:
    """Split ``prefix:name`` into its two parts.

    Raises InvalidIconIdError unless there are exactly two non-empty parts.
    """
    parts = icon_id.split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidIconIdError(icon_id)
    return parts[0], parts[1]


def icon_prefix(icon_id: str) -> str:
    return icon_id.split(":", 1)[0]


# ---------------------------------------------------------------------------
# Icon sets
# ---------------------------------------------------------------------------


class CodeFlavor(Enum):
    """Target framework for generated icon code."""

    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    SOLID = "solid"
    SVG = "svg"  # Raw markup exported as a string


@dataclass
class IconData:
    """Raw markup and geometry for one icon."""

    body: str
    width: int | float | None = None
    height: int | float | None = None
    left: int | float | None = None
    top: int | float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IconData:
        return cls(
            body=data["body"],
            width=data.get("width"),
            height=data.get("height"),
            left=data.get("left"),
            top=data.get("top"),
        )


@dataclass
class IconSetDocument:
    """Per-collection payload as served by the Iconify API."""

    prefix: str = ""
    icons: dict[str, IconData] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)  # alias -> parent
    width: int | float | None = None
    height: int | float | None = None

    @property
    def defaults(self) -> dict[str, int | float | None]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Any) -> IconSetDocument:
        """Build a document from Iconify JSON, skipping malformed entries."""
        if not isinstance(data, dict):
            raise IconSetFormatError("Icon set payload must be a JSON object")

        icons: dict[str, IconData] = {}
        raw_icons = data.get("icons") or {}
        if isinstance(raw_icons, dict):
            for name, raw in raw_icons.items():
                if isinstance(raw, dict) and isinstance(raw.get("body"), str):
                    icons[name] = IconData.from_dict(raw)

        aliases: dict[str, str] = {}
        raw_aliases = data.get("aliases") or {}
        if isinstance(raw_aliases, dict):
            for name, raw in raw_aliases.items():
                if isinstance(raw, dict) and isinstance(raw.get("parent"), str):
                    aliases[name] = raw["parent"]

        return cls(
            prefix=data.get("prefix", "") or "",
            icons=icons,
            aliases=aliases,
            width=data.get("width"),
            height=data.get("height"),
        )


@dataclass
class ResolvedIcon:
    """Final markup for an icon after alias resolution and fill injection."""

    icon_id: str
    resolved_name: str
    svg: str
    width: int | float
    height: int | float


# ---------------------------------------------------------------------------
# Managed file
# ---------------------------------------------------------------------------


@dataclass
class IconEntry:
    """One generated block in a managed file."""

    icon_id: str
    component_name: str
    code: str = ""


@dataclass
class SyncResult:
    """Outcome of adding an icon to a managed file."""

    component_name: str
    already_exists: bool = False
    existing_name: str | None = None
    file_path: str = ""
    import_statement: str = ""


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


@dataclass
class CollectionUsage:
    count: int = 0
    last_used: str = ""


@dataclass
class HistoryEntry:
    icon_id: str
    timestamp: str = ""


@dataclass
class Preferences:
    """Learned collection usage and most-recently-used icon history.

    The on-disk document uses camelCase keys (``lastUsed``, ``iconId``).
    """

    collections: dict[str, CollectionUsage] = field(default_factory=dict)
    history: list[HistoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "collections": {
                prefix: {"count": usage.count, "lastUsed": usage.last_used}
                for prefix, usage in self.collections.items()
            },
            "history": [
                {"iconId": h.icon_id, "timestamp": h.timestamp} for h in self.history
            ],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Preferences:
        if not isinstance(data, dict):
            raise ValueError("Preferences document must be a JSON object")
        collections = {
            prefix: CollectionUsage(
                count=int(usage.get("count", 0)),
                last_used=usage.get("lastUsed", ""),
            )
            for prefix, usage in (data.get("collections") or {}).items()
        }
        history = [
            HistoryEntry(icon_id=h["iconId"], timestamp=h.get("timestamp", ""))
            for h in (data.get("history") or [])
        ]
        return cls(collections=collections, history=history)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@dataclass
class SearchResult:
    icons: list[str] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    start: int = 0
    collections: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchResult:
        collections: dict[str, int] = {}
        for prefix, info in (data.get("collections") or {}).items():
            # Older API versions return full collection info instead of a count
            if isinstance(info, dict):
                collections[prefix] = int(info.get("total", info.get("count", 0)) or 0)
            else:
                collections[prefix] = int(info)
        return cls(
            icons=list(data.get("icons") or []),
            total=int(data.get("total", 0)),
            limit=int(data.get("limit", 0)),
            start=int(data.get("start", 0)),
            collections=collections,
        )


@dataclass
class CollectionInfo:
    prefix: str
    name: str = ""
    total: int = 0
    author: str = ""
    license: str = ""
    category: str = ""
    samples: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, prefix: str, data: dict[str, Any]) -> CollectionInfo:
        author = data.get("author") or {}
        license_ = data.get("license") or {}
        return cls(
            prefix=prefix,
            name=data.get("name", prefix),
            total=int(data.get("total", 0) or 0),
            author=author.get("name", "") if isinstance(author, dict) else str(author),
            license=(
                license_.get("spdx") or license_.get("title", "")
                if isinstance(license_, dict)
                else str(license_)
            ),
            category=data.get("category", "") or "",
            samples=list(data.get("samples") or []),
        )
