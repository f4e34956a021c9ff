"""Info command implementation."""

import click
from rich.panel import Panel

from hymod.commands.common import console, find_entry, format_status, require_install_root, run_async
from hymod.core.catalog import CatalogClient
from hymod.core.updates import check_mod, load_entries


@click.command()
@click.argument("mod_name")
@click.option("--check", "-c", is_flag=True, help="Also check the catalog for updates")
@click.pass_context
def info(ctx: click.Context, mod_name: str, check: bool):
    """Show detailed information about an installed mod.

    MOD_NAME is the mod's file name or display name.
    """
    install_root = require_install_root(ctx)
    entry = find_entry(load_entries(install_root), mod_name)

    if entry is None:
        console.print(f"[red]Error:[/red] Mod '{mod_name}' is not installed")
        raise SystemExit(1)

    if check:
        run_async(check_mod(entry, CatalogClient()))

    mod = entry.mod
    slug = mod.catalog_slug or "-"
    if mod.catalog_slug_is_guessed:
        slug += " (guessed from name)"

    lines = [
        f"[bold]Name:[/bold] {mod.name}",
        f"[bold]Version:[/bold] {mod.version or '-'}",
        f"[bold]Authors:[/bold] {', '.join(mod.authors) or '-'}",
        f"[bold]File:[/bold] {mod.id}",
        f"[bold]Installed:[/bold] {mod.installed_at.strftime('%Y-%m-%d %H:%M')}",
        f"[bold]Website:[/bold] {mod.website or '-'}",
        f"[bold]Catalog slug:[/bold] {slug}",
    ]
    if mod.description:
        lines.append(f"[bold]Description:[/bold] {mod.description}")
    if check:
        lines.append(f"[bold]Status:[/bold] {format_status(entry.status)}")
        if entry.latest_version:
            lines.append(f"[bold]Latest:[/bold] {entry.latest_version}")

    console.print(Panel("\n".join(lines), title=f"[green]{mod.name}[/green]"))
