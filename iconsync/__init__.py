"""iconsync — search Iconify collections and sync icon components into a project."""

__version__ = "0.1.0"
