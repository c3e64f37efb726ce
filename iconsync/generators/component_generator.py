"""Component generator — turns icon markup into framework-specific source code.

Every generated block starts with a ``// <iconId>`` line. The managed-file
parser relies on that marker sitting directly above the export to detect
icons that were already synced.
"""

from __future__ import annotations

import re
from pathlib import Path

from iconsync.models import CodeFlavor

MANAGED_BANNER = (
    "// Auto-generated icons file - managed by iconsync\n"
    "// Do not edit manually - use `iconsync sync` to add new icons\n"
)

_XML_DECLARATION = re.compile(r"<\?xml[^>]*\?>")
_NAME_SEPARATORS = re.compile(r"[-_]")

# HTML attribute -> JSX prop
REACT_ATTRIBUTES = {
    "class=": "className=",
    "clip-path=": "clipPath=",
    "fill-rule=": "fillRule=",
    "stroke-width=": "strokeWidth=",
    "stroke-linecap=": "strokeLinecap=",
    "stroke-linejoin=": "strokeLinejoin=",
}


def icon_id_to_component_name(icon_id: str) -> str:
    """Derive an export name, e.g. ``lucide:arrow-right`` -> ``ArrowRightIcon``."""
    parts = icon_id.split(":")
    name = parts[1] if len(parts) > 1 else ""
    if not name:
        return "Icon"
    pascal = "".join(
        segment[:1].upper() + segment[1:].lower() for segment in _NAME_SEPARATORS.split(name)
    )
    return pascal + "Icon"


def clean_svg(svg: str) -> str:
    """Drop any XML declaration and surrounding whitespace."""
    return _XML_DECLARATION.sub("", svg).strip()


def escape_backticks(markup: str) -> str:
    return markup.replace("`", "\\`")


# ---------------------------------------------------------------------------
# Flavors
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Base generator; subclasses render one framework flavor."""

    flavor: CodeFlavor = CodeFlavor.SVG
    header_imports: str = ""
    header_notes: str = ""

    def generate(self, name: str, svg: str, icon_id: str) -> str:
        return self.render(name, clean_svg(svg), icon_id)

    def render(self, name: str, svg: str, icon_id: str) -> str:
        raise NotImplementedError

    def header(self) -> str:
        header = MANAGED_BANNER + self.header_notes + "\n"
        if self.header_imports:
            header += self.header_imports + "\n\n"
        return header


class ReactGenerator(ComponentGenerator):
    flavor = CodeFlavor.REACT
    header_imports = 'import type React from "react";'

    def render(self, name: str, svg: str, icon_id: str) -> str:
        jsx = svg
        for html_attr, jsx_attr in REACT_ATTRIBUTES.items():
            jsx = jsx.replace(html_attr, jsx_attr)
        jsx = jsx.replace("<svg", "<svg {...props}", 1)
        return (
            f"// {icon_id}\n"
            f"export const {name} = (props: React.SVGProps<SVGSVGElement>) => (\n"
            f"  {jsx}\n"
            f");"
        )


class VueGenerator(ComponentGenerator):
    flavor = CodeFlavor.VUE

    def render(self, name: str, svg: str, icon_id: str) -> str:
        template = escape_backticks(svg).replace("<svg", '<svg v-bind="$attrs"', 1)
        return (
            f"// {icon_id}\n"
            f"export const {name} = {{\n"
            f'  name: "{name}",\n'
            f"  inheritAttrs: false,\n"
            f"  template: `{template}`,\n"
            f"}};"
        )


class SvelteGenerator(ComponentGenerator):
    """Svelte needs one file per component, so icons are exported as strings
    for use with ``{@html ...}``, plus a helper that sets the root class."""

    flavor = CodeFlavor.SVELTE
    header_notes = '// Usage: {@html IconName} or {@html IconNameWithClass("my-class")}\n'

    def render(self, name: str, svg: str, icon_id: str) -> str:
        escaped = escape_backticks(svg)
        with_class = escaped.replace("<svg", '<svg class="${className}"', 1)
        return (
            f"// {icon_id}\n"
            f'// Use with: {{@html {name}}} or {{@html {name}WithClass("my-class")}}\n'
            f"export const {name} = `{escaped}`;\n"
            f"export const {name}WithClass = (className: string) => `{with_class}`;"
        )


class SolidGenerator(ComponentGenerator):
    flavor = CodeFlavor.SOLID
    header_imports = 'import type { JSX } from "solid-js";'

    def render(self, name: str, svg: str, icon_id: str) -> str:
        jsx = svg.replace("<svg", "<svg {...props}", 1)
        return (
            f"// {icon_id}\n"
            f'export const {name} = (props: JSX.IntrinsicElements["svg"]) => (\n'
            f"  {jsx}\n"
            f");"
        )


class SvgGenerator(ComponentGenerator):
    flavor = CodeFlavor.SVG

    def render(self, name: str, svg: str, icon_id: str) -> str:
        return f"// {icon_id}\nexport const {name} = `{svg}`;"


GENERATORS: dict[CodeFlavor, ComponentGenerator] = {
    gen.flavor: gen
    for gen in (ReactGenerator(), VueGenerator(), SvelteGenerator(), SolidGenerator(), SvgGenerator())
}


def get_generator(flavor: CodeFlavor | str) -> ComponentGenerator:
    return GENERATORS[CodeFlavor(flavor)]


def generate_icon_component(name: str, svg: str, icon_id: str, flavor: CodeFlavor | str) -> str:
    """Render *svg* as an exported *flavor* declaration named *name*."""
    return get_generator(flavor).generate(name, svg, icon_id)


def file_header(flavor: CodeFlavor | str) -> str:
    """Banner (and imports) for a freshly created managed file."""
    return get_generator(flavor).header()


def import_statement(file_path: str | Path, component_name: str) -> str:
    """Named import for *component_name*; the relative path is a hint only."""
    stem = Path(file_path).stem
    return f"import {{ {component_name} }} from './{stem}';"
