"""Managed icons file — duplicate detection and append-only sync."""

from iconsync.sync.managed_file import ManagedFileStore, add_icon_to_file, parse_existing_icons

__all__ = ["ManagedFileStore", "add_icon_to_file", "parse_existing_icons"]
