"""Managed icons file — one generated source file per project.

The file is a header followed by one block per synced icon::

    // lucide:home
    export const HomeIcon = ...

Blocks are separated by a single blank line and are only ever appended.
A JSON sidecar (``.<filename>.index.json``) records every appended entry so
duplicate detection survives reformatted marker comments. The sidecar is
written before the file; its entries only count while their component is
still exported. Component names are unique within one file.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from iconsync.errors import ComponentNameConflictError
from iconsync.generators.component_generator import (
    file_header,
    generate_icon_component,
    icon_id_to_component_name,
    import_statement,
)
from iconsync.models import CodeFlavor, IconEntry, SyncResult

logger = logging.getLogger(__name__)

# "// prefix:name", optional further comment lines, then the export
_ICON_PATTERN = re.compile(
    r"//\s*([\w-]+:[\w.-]+)\s*\n\s*(?://[^\n]*\n\s*)*export\s+(?:const|function)\s+(\w+)"
)
# "<!-- prefix:name -->" template-style marker
_TEMPLATE_PATTERN = re.compile(r"<!--\s*([\w-]+:[\w.-]+)\s*-->")
_EXPORT_PATTERN = re.compile(r"export\s+(?:const|function)\s+(\w+)")


def parse_existing_icons(path: str | Path) -> dict[str, str]:
    """Return ``{icon_id: component_name}`` for every marked export in *path*.

    A missing or unreadable file yields an empty mapping.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    return _scan_content(content)


def _scan_content(content: str) -> dict[str, str]:
    icons: dict[str, str] = {}
    for match in _ICON_PATTERN.finditer(content):
        icons[match.group(1)] = match.group(2)

    for match in _TEMPLATE_PATTERN.finditer(content):
        export = _EXPORT_PATTERN.search(content, match.end())
        if export:
            icons[match.group(1)] = export.group(1)
    return icons


def _index_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.index.json")


def _load_index(path: Path) -> dict[str, str]:
    index_path = _index_path(path)
    if not index_path.exists():
        return {}
    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}


def existing_icons(path: str | Path) -> dict[str, str]:
    """Comment-scan results merged with sidecar entries still exported by the file."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}

    icons = _scan_content(content)
    exported = set(_EXPORT_PATTERN.findall(content))
    for icon_id, name in _load_index(path).items():
        if icon_id not in icons and name in exported:
            icons[icon_id] = name
    return icons


def add_icon_to_file(
    path: str | Path,
    icon_id: str,
    svg: str,
    flavor: CodeFlavor | str,
    custom_name: str | None = None,
) -> SyncResult:
    """Append the generated code for *icon_id* to *path* unless it is already there.

    Re-syncing an icon never grows the file: the existing component name is
    returned with ``already_exists=True``. A component name the file already
    exports raises ComponentNameConflictError and leaves the file untouched.
    Filesystem errors propagate.
    """
    path = Path(path)
    flavor = CodeFlavor(flavor)

    icons = existing_icons(path)
    if icon_id in icons:
        name = icons[icon_id]
        logger.debug("%s already present in %s as %s", icon_id, path, name)
        return SyncResult(
            component_name=name,
            already_exists=True,
            existing_name=name,
            file_path=str(path),
            import_statement=import_statement(path, name),
        )

    name = custom_name or icon_id_to_component_name(icon_id)
    if path.exists():
        content = path.read_text(encoding="utf-8")
    else:
        content = file_header(flavor)

    if name in _EXPORT_PATTERN.findall(content):
        owner = next((other for other, used in icons.items() if used == name), None)
        raise ComponentNameConflictError(name, icon_id, owner)

    code = generate_icon_component(name, svg, icon_id, flavor)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Sidecar first: an entry whose export never made it into the file is ignored
    _record_in_index(path, icon_id, name)
    content = content.rstrip() + "\n\n" + code + "\n"
    path.write_text(content, encoding="utf-8")

    logger.info("Added %s to %s as %s", icon_id, path, name)
    return SyncResult(
        component_name=name,
        already_exists=False,
        file_path=str(path),
        import_statement=import_statement(path, name),
    )


def _record_in_index(path: Path, icon_id: str, name: str) -> None:
    # *name* is not exported yet, so any other entry holding it is stale
    index = {k: v for k, v in _load_index(path).items() if v != name}
    index[icon_id] = name
    _index_path(path).write_text(json.dumps(index, indent=2, sort_keys=True), encoding="utf-8")


class ManagedFileStore:
    """The managed icons file for one project."""

    def __init__(self, path: str | Path, flavor: CodeFlavor | str = CodeFlavor.REACT):
        self.path = Path(path)
        self.flavor = CodeFlavor(flavor)

    def add(self, icon_id: str, svg: str, custom_name: str | None = None) -> SyncResult:
        return add_icon_to_file(self.path, icon_id, svg, self.flavor, custom_name)

    def icons(self) -> dict[str, str]:
        return existing_icons(self.path)

    def contains(self, icon_id: str) -> bool:
        return icon_id in self.icons()

    def entries(self) -> list[IconEntry]:
        """Entries in file order, with the code of each block."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return []

        matches = list(_ICON_PATTERN.finditer(content))
        entries = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(content)
            code = content[match.start():end].strip()
            entries.append(IconEntry(icon_id=match.group(1), component_name=match.group(2), code=code))
        return entries

    def import_statement(self, component_name: str) -> str:
        return import_statement(self.path, component_name)
