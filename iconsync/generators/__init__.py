"""Framework-specific code generation for synced icons."""

from iconsync.generators.component_generator import (
    CodeFlavor,
    file_header,
    generate_icon_component,
    icon_id_to_component_name,
    import_statement,
)

__all__ = [
    "CodeFlavor",
    "file_header",
    "generate_icon_component",
    "icon_id_to_component_name",
    "import_statement",
]
