"""Exception hierarchy for iconsync."""

from __future__ import annotations


class IconSyncError(Exception):
    """Base class for all iconsync errors."""


class ConfigError(IconSyncError):
    """The configuration file could not be interpreted."""


class InvalidIconIdError(IconSyncError):
    """An icon identifier did not have the ``prefix:name`` shape."""

    def __init__(self, icon_id: str):
        self.icon_id = icon_id
        super().__init__(
            f"Invalid icon ID '{icon_id}'. Use 'prefix:name' format (e.g., 'mdi:home')"
        )


class IconNotFoundError(IconSyncError):
    """The icon set document has no data for the requested icon."""

    def __init__(self, icon_id: str):
        self.icon_id = icon_id
        super().__init__(f"Icon '{icon_id}' not found")


class IconSetFormatError(IconSyncError):
    """An icon set payload did not have the expected shape."""


class IconApiError(IconSyncError):
    """The icon API request failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ComponentNameConflictError(IconSyncError):
    """A component name is already exported by the managed file."""

    def __init__(self, component_name: str, icon_id: str, owner: str | None = None):
        self.component_name = component_name
        self.icon_id = icon_id
        self.owner = owner
        used_by = f" by {owner}" if owner else ""
        super().__init__(
            f"Component name '{component_name}' is already used{used_by}; "
            f"pass a custom name to sync '{icon_id}'"
        )
