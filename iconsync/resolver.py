"""Icon set resolution — alias chains and final SVG assembly."""

from __future__ import annotations

import re
from urllib.parse import quote

from iconsync.errors import IconNotFoundError
from iconsync.models import IconData, IconSetDocument, ResolvedIcon, parse_icon_id

DEFAULT_SIZE = 24
DEFAULT_COLOR = "currentColor"
MAX_ALIAS_DEPTH = 10

# SVG elements that receive a fill when they declare neither fill nor stroke
SHAPE_ELEMENTS = ("path", "circle", "rect", "polygon", "polyline", "line", "ellipse")

_SHAPE_PATTERNS = {
    element: re.compile(rf"<{element}(?=[\s/>])(?![^>]*(?:fill=|stroke=))([^>]*?)(/?)>")
    for element in SHAPE_ELEMENTS
}


def resolve_alias(doc: IconSetDocument, name: str, max_depth: int = MAX_ALIAS_DEPTH) -> str:
    """Follow alias -> parent hops (A -> B -> C) and return the last name reached.

    Chains longer than *max_depth* stop where the limit is hit.
    """
    current = name
    depth = 0
    while current in doc.aliases and depth < max_depth:
        current = doc.aliases[current]
        depth += 1
    return current


def apply_fill(body: str, color: str = DEFAULT_COLOR) -> str:
    """Insert ``fill="<color>"`` into shape tags lacking both fill and stroke."""
    result = body
    for element, pattern in _SHAPE_PATTERNS.items():
        result = pattern.sub(
            lambda m, el=element: f'<{el} fill="{color}"{m.group(1)}{m.group(2)}>',
            result,
        )
    return result


def _dimension(*candidates) -> int | float:
    for value in candidates:
        if value:
            return value
    return DEFAULT_SIZE


def build_svg(
    icon_data: IconData,
    defaults: dict | None = None,
    size: int | None = None,
    color: str | None = None,
) -> str:
    """Assemble a standalone ``<svg>`` element for *icon_data*."""
    defaults = defaults or {}
    width = _dimension(icon_data.width, defaults.get("width"))
    height = _dimension(icon_data.height, defaults.get("height"))
    view_box = f"{icon_data.left or 0} {icon_data.top or 0} {width} {height}"
    svg_size = f'width="{size}" height="{size}"' if size else 'width="1em" height="1em"'
    body = apply_fill(icon_data.body, color or DEFAULT_COLOR)
    return f'<svg xmlns="http://www.w3.org/2000/svg" {svg_size} viewBox="{view_box}">{body}</svg>'


def resolve_icon(
    doc: IconSetDocument,
    icon_id: str,
    size: int | None = None,
    color: str | None = None,
) -> ResolvedIcon:
    """Resolve *icon_id* against *doc* and build its final markup.

    Raises InvalidIconIdError or IconNotFoundError.
    """
    _, name = parse_icon_id(icon_id)
    resolved_name = resolve_alias(doc, name)
    icon_data = doc.icons.get(resolved_name)
    if icon_data is None:
        raise IconNotFoundError(icon_id)

    return ResolvedIcon(
        icon_id=icon_id,
        resolved_name=resolved_name,
        svg=build_svg(icon_data, doc.defaults, size=size, color=color),
        width=_dimension(icon_data.width, doc.width),
        height=_dimension(icon_data.height, doc.height),
    )


def svg_data_uri(svg: str) -> str:
    """``data:image/svg+xml,...`` form of *svg*, percent-encoded like encodeURIComponent."""
    return "data:image/svg+xml," + quote(svg, safe="-_.!~*'()")


def svg_css_background(svg: str) -> str:
    return f'background-image: url("{svg_data_uri(svg)}");'
