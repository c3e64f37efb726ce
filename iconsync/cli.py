"""iconsync CLI — the main entry point."""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from iconsync import __version__
from iconsync.config import load_settings
from iconsync.errors import ConfigError
from iconsync.logging_config import configure_logging
from iconsync.models import CodeFlavor

console = Console()
err_console = Console(stderr=True)

FLAVORS = [f.value for f in CodeFlavor]


def _service(ctx: click.Context):
    from iconsync.service import IconService

    return IconService.from_settings(ctx.obj["settings"], **ctx.obj.get("client_kwargs", {}))


def _fail(message: str) -> None:
    err_console.print(f"[red]{message}[/]")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="Path to a config.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool):
    """iconsync — search 200+ Iconify collections and sync icons into your project."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_settings(config_path)
    except ConfigError as e:
        _fail(f"Invalid configuration: {e}")


# ── Search ───────────────────────────────────────────────────────────


@main.command()
@click.argument("query")
@click.option("--prefix", "-p", default=None, help="Filter by collection prefix (e.g., lucide, mdi)")
@click.option("--category", default=None, help="Filter by category (e.g., General, Emoji)")
@click.option("--limit", "-l", default=32, type=click.IntRange(1, 999), help="Max results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON for scripting")
@click.pass_context
def search(ctx: click.Context, query: str, prefix: str | None, category: str | None, limit: int, as_json: bool):
    """Search for icons across all collections."""
    service = _service(ctx)
    result = service.search(query, limit=limit, prefix=prefix, category=category)
    service.close()
    if not result.ok:
        _fail(result.error)

    data = result.value
    if as_json:
        click.echo(json.dumps({"icons": data.icons, "total": data.total}))
        return

    console.print(f"[bold]Found {data.total} icons (showing {len(data.icons)}):[/]\n")
    for icon_id in data.icons:
        prefix_part, _, name = icon_id.partition(":")
        console.print(f"  [cyan]{prefix_part}[/]:{name}")
    console.print("\n[dim]Use 'iconsync get <icon-id>' to retrieve SVG[/]")


# ── Get ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("icon_id")
@click.option("--color", "-c", default=None, help="Icon color (e.g., '#ff0000', 'currentColor')")
@click.option("--size", "-s", default=None, type=int, help="Icon size in pixels")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON with metadata")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["svg", "data-uri", "css"]),
    default="svg",
    help="Output form of the icon",
)
@click.pass_context
def get(
    ctx: click.Context,
    icon_id: str,
    color: str | None,
    size: int | None,
    as_json: bool,
    output_format: str,
):
    """Print a single icon's SVG (or its data URI / CSS form) to stdout."""
    from iconsync.resolver import svg_css_background, svg_data_uri

    service = _service(ctx)
    result = service.get_icon(icon_id, size=size, color=color)
    service.close()
    if not result.ok:
        _fail(result.error)

    icon = result.value
    if as_json:
        click.echo(
            json.dumps(
                {
                    "id": icon_id,
                    "svg": icon.svg,
                    "dataUri": svg_data_uri(icon.svg),
                    "width": icon.width,
                    "height": icon.height,
                }
            )
        )
    elif output_format == "data-uri":
        click.echo(svg_data_uri(icon.svg))
    elif output_format == "css":
        click.echo(svg_css_background(icon.svg))
    else:
        click.echo(icon.svg)


# ── Sync ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("icon_id")
@click.option("--file", "-f", "file_path", default=None, help="Managed icons file (default from config)")
@click.option("--flavor", type=click.Choice(FLAVORS), default=None, help="Code flavor (default from config)")
@click.option("--name", "custom_name", default=None, help="Component name override")
@click.option("--color", "-c", default=None, help="Fill color for shapes without fill/stroke")
@click.option("--size", "-s", default=None, type=int, help="Icon size in pixels")
@click.pass_context
def sync(
    ctx: click.Context,
    icon_id: str,
    file_path: str | None,
    flavor: str | None,
    custom_name: str | None,
    color: str | None,
    size: int | None,
):
    """Add an icon component to the project's managed icons file.

    Syncing an icon that is already in the file leaves the file untouched.
    """
    service = _service(ctx)
    try:
        result = service.sync_icon(
            icon_id, file_path=file_path, flavor=flavor, custom_name=custom_name, size=size, color=color
        )
    except OSError as e:
        _fail(f"Could not write icons file: {e}")
    finally:
        service.close()

    if not result.ok:
        _fail(result.error)

    synced = result.value
    if synced.already_exists:
        console.print(f"  [yellow]=[/] {icon_id} already synced as [cyan]{synced.component_name}[/]")
    else:
        console.print(f"  [green]+[/] {icon_id} added as [cyan]{synced.component_name}[/] to {synced.file_path}")
    console.print(f"\n  {synced.import_statement}")


# ── Recommend ────────────────────────────────────────────────────────


@main.command()
@click.argument("use_case")
@click.option("--style", type=click.Choice(["solid", "outline", "any"]), default="any")
@click.option("--limit", "-l", default=10, type=click.IntRange(1, 20))
@click.pass_context
def recommend(ctx: click.Context, use_case: str, style: str, limit: int):
    """Recommend icons for a UI use case (e.g. 'settings button')."""
    service = _service(ctx)
    result = service.recommend(use_case, style=style, limit=limit)
    service.close()
    if not result.ok:
        _fail(result.error)

    rec = result.value
    console.print(f"\n[bold]Recommendations for[/] \"{rec.use_case}\" (term: {rec.search_term}, style: {rec.style})\n")
    for icon_id in rec.icons:
        console.print(f"  [cyan]{icon_id}[/]")


# ── Collections ──────────────────────────────────────────────────────


@main.command()
@click.option("--category", default=None, help="Filter by category")
@click.option("--search", "search_text", default=None, help="Filter by prefix or name")
@click.pass_context
def collections(ctx: click.Context, category: str | None, search_text: str | None):
    """List available icon collections."""
    service = _service(ctx)
    result = service.list_collections(category=category, search=search_text)
    service.close()
    if not result.ok:
        _fail(result.error)

    table = Table(title=f"Icon Collections ({len(result.value)} shown)")
    table.add_column("Prefix", style="cyan")
    table.add_column("Name")
    table.add_column("Icons", justify="right")
    table.add_column("License")
    table.add_column("Category", style="dim")
    for info in result.value:
        table.add_row(info.prefix, info.name, str(info.total), info.license or "Unknown", info.category)
    console.print(table)


# ── Preferences ──────────────────────────────────────────────────────


@main.command()
@click.option("--limit", "-l", default=20, type=click.IntRange(1, 50))
@click.pass_context
def recent(ctx: click.Context, limit: int):
    """Show recently used icons."""
    from iconsync.preferences.store import PreferenceStore

    history = PreferenceStore(ctx.obj["settings"].preferences_path).get_recent_icons(limit)
    if not history:
        console.print("[yellow]No recent icons.[/]")
        return
    for entry in history:
        console.print(f"  [cyan]{entry.icon_id}[/] [dim]{entry.timestamp}[/]")


@main.group()
def prefs():
    """Inspect or reset learned collection preferences."""


@prefs.command(name="show")
@click.pass_context
def show_prefs(ctx: click.Context):
    """Show collections ranked by usage."""
    from iconsync.preferences.store import PreferenceStore

    data = PreferenceStore(ctx.obj["settings"].preferences_path).load()
    if not data.collections:
        console.print("[yellow]No usage recorded yet.[/]")
        return

    table = Table(title="Preferred Collections")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Prefix", style="cyan")
    table.add_column("Uses", justify="right", style="green")
    table.add_column("Last used")
    ranked = sorted(data.collections.items(), key=lambda item: item[1].count, reverse=True)
    for i, (prefix, usage) in enumerate(ranked):
        table.add_row(str(i + 1), prefix, str(usage.count), usage.last_used)
    console.print(table)


@prefs.command(name="clear")
@click.confirmation_option(prompt="Clear all learned preferences?")
@click.pass_context
def clear_prefs(ctx: click.Context):
    """Reset usage counts and history."""
    from iconsync.preferences.store import PreferenceStore

    PreferenceStore(ctx.obj["settings"].preferences_path).clear()
    console.print("[green]Preferences cleared.[/]")


if __name__ == "__main__":
    main()
