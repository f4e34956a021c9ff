"""List command implementation."""

import click
from rich.table import Table

from hymod.commands.common import console, mods_dir_hint, require_install_root
from hymod.core.loader import load_from_directory


@click.command("list")
@click.pass_context
def list_mods(ctx: click.Context):
    """List all installed mods."""
    install_root = require_install_root(ctx)
    mods = load_from_directory(install_root)

    if not mods:
        console.print("No mods installed")
        console.print(mods_dir_hint(install_root))
        raise SystemExit(0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Mod")
    table.add_column("Version")
    table.add_column("Authors")
    table.add_column("File")
    table.add_column("Catalog slug")

    for mod in mods:
        if mod.catalog_slug is None:
            slug = "[dim]-[/dim]"
        elif mod.catalog_slug_is_guessed:
            slug = f"{mod.catalog_slug} [dim](guessed)[/dim]"
        else:
            slug = mod.catalog_slug
        table.add_row(
            mod.name,
            mod.version or "[dim]?[/dim]",
            ", ".join(mod.authors),
            mod.id,
            slug,
        )

    console.print(table)
    console.print(f"\n{len(mods)} mod(s) installed")
