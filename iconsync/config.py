"""Settings — defaults, then ``~/.iconsync/config.yaml``, then environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from iconsync.errors import ConfigError
from iconsync.models import CodeFlavor

DEFAULT_API_URL = "https://api.iconify.design"


def default_home() -> Path:
    return Path.home() / ".iconsync"


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    preferences_path: Path = field(default_factory=lambda: default_home() / "preferences.json")
    timeout: float = 10.0
    default_flavor: str = "react"
    icons_file: str = "src/components/icons.tsx"


def load_settings(path: str | Path | None = None) -> Settings:
    """Build Settings from the YAML config file and ICONSYNC_* variables.

    Unknown keys in the file are ignored. A missing file is not an error.
    """
    settings = Settings()

    config_path = Path(path) if path else default_home() / "config.yaml"
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        known = {f.name for f in fields(Settings)}
        for key, value in data.items():
            if key in known:
                setattr(settings, key, value)

    if os.environ.get("ICONSYNC_API_URL"):
        settings.api_url = os.environ["ICONSYNC_API_URL"]
    if os.environ.get("ICONSYNC_HOME"):
        settings.preferences_path = Path(os.environ["ICONSYNC_HOME"]) / "preferences.json"
    if os.environ.get("ICONSYNC_TIMEOUT"):
        try:
            settings.timeout = float(os.environ["ICONSYNC_TIMEOUT"])
        except ValueError as exc:
            raise ConfigError(f"ICONSYNC_TIMEOUT must be a number: {exc}") from exc

    try:
        settings.default_flavor = CodeFlavor(settings.default_flavor).value
    except ValueError as exc:
        choices = ", ".join(f.value for f in CodeFlavor)
        raise ConfigError(f"default_flavor must be one of {choices}, got {settings.default_flavor!r}") from exc

    settings.preferences_path = Path(settings.preferences_path).expanduser()
    try:
        settings.timeout = float(settings.timeout)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeout must be a number: {exc}") from exc
    return settings
