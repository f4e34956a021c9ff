"""Outdated command implementation."""

import click
from rich.table import Table

from hymod.commands.common import console, format_status, require_install_root, run_async
from hymod.core.catalog import CatalogClient
from hymod.core.updates import check_all, load_entries
from hymod.models.status import UpdateStatus


@click.command()
@click.option("--all", "-a", "show_all", is_flag=True, help="Show every mod, not just outdated ones")
@click.pass_context
def outdated(ctx: click.Context, show_all: bool):
    """Check installed mods for available updates."""
    install_root = require_install_root(ctx)
    entries = load_entries(install_root)

    if not entries:
        console.print("No mods installed")
        raise SystemExit(0)

    console.print("[blue]Checking for updates...[/blue]\n")
    summary = run_async(check_all(entries, CatalogClient()))

    rows = entries if show_all else [
        e for e in entries
        if e.status in (UpdateStatus.UPDATE_AVAILABLE, UpdateStatus.ERROR)
    ]

    if rows:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Mod")
        table.add_column("Current")
        table.add_column("Latest")
        table.add_column("Status")

        for entry in rows:
            latest = entry.latest_version
            if entry.has_update:
                latest = f"[green]{latest}[/green]"
            table.add_row(
                entry.name,
                entry.mod.version or entry.mod.id,
                latest or "",
                format_status(entry.status),
            )

        console.print(table)
        console.print("")

    console.print(summary.message)
    if summary.updates > 0:
        console.print("[dim]Run 'hymod upgrade-all' to update all mods[/dim]")
