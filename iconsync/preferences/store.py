"""File-based preference store — collection usage counts and recent icon history.

Everything lives in one JSON document (``~/.iconsync/preferences.json`` by
default). Writes go to a per-process temp file that is renamed over the
target, so readers see either the old or the new document, never a torn one.
Concurrent read-modify-write cycles are last-writer-wins.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from iconsync.models import (
    MAX_HISTORY_SIZE,
    CollectionUsage,
    HistoryEntry,
    Preferences,
    now_iso,
)

logger = logging.getLogger(__name__)

MAX_TRACK_ATTEMPTS = 3


def default_preferences_path() -> Path:
    return Path.home() / ".iconsync" / "preferences.json"


class PreferenceStore:
    """Learned icon preferences backed by a single JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else default_preferences_path()

    # -- persistence ---------------------------------------------------------

    def load(self) -> Preferences:
        """Read preferences; a missing or corrupt file yields empty preferences."""
        if not self.path.exists():
            return Preferences()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Preferences.from_dict(data)
        except (OSError, ValueError, TypeError, KeyError, AttributeError):
            logger.debug("Ignoring unreadable preferences file %s", self.path)
            return Preferences()

    def save(self, prefs: Preferences) -> None:
        """Atomically replace the preferences file with *prefs*."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(prefs.to_dict(), indent=2)
        fd, temp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f"{self.path.name}.{os.getpid()}.", suffix=".tmp"
        )
        temp_path = Path(temp_name)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(temp_path, self.path)
        except OSError:
            if temp_path.exists():
                # Direct overwrite is not atomic
                with contextlib.suppress(OSError):
                    self.path.write_text(payload, encoding="utf-8")
                with contextlib.suppress(OSError):
                    temp_path.unlink()
            raise

    # -- tracking ------------------------------------------------------------

    def track_usage(self, prefix: str, icon_id: str | None = None) -> None:
        """Record one use of *prefix* (and *icon_id*, if given).

        Best-effort: retried up to MAX_TRACK_ATTEMPTS times without delay,
        then logged and dropped. Never raises.
        """
        for attempt in range(1, MAX_TRACK_ATTEMPTS + 1):
            try:
                prefs = self.load()
                now = now_iso()

                usage = prefs.collections.get(prefix)
                if usage is None:
                    usage = prefs.collections[prefix] = CollectionUsage()
                usage.count += 1
                usage.last_used = now

                if icon_id:
                    prefs.history = [h for h in prefs.history if h.icon_id != icon_id]
                    prefs.history.insert(0, HistoryEntry(icon_id=icon_id, timestamp=now))
                    del prefs.history[MAX_HISTORY_SIZE:]

                self.save(prefs)
                return
            except Exception as exc:
                if attempt == MAX_TRACK_ATTEMPTS:
                    logger.warning(
                        "Failed to track icon usage for %s after %d attempts: %s",
                        icon_id or prefix,
                        MAX_TRACK_ATTEMPTS,
                        exc,
                    )

    # -- querying ------------------------------------------------------------

    def get_preferred_collections(self) -> list[str]:
        """Collection prefixes, most used first."""
        collections = self.load().collections
        return sorted(collections, key=lambda prefix: collections[prefix].count, reverse=True)

    def get_recent_icons(self, limit: int = 20) -> list[HistoryEntry]:
        return self.load().history[:limit]

    def clear(self) -> None:
        self.save(Preferences())
