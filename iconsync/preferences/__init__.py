"""Learned icon preferences — usage counters and recent history."""

from iconsync.preferences.store import PreferenceStore, default_preferences_path

__all__ = ["PreferenceStore", "default_preferences_path"]
