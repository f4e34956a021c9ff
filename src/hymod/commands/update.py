"""Update command implementation."""

import click

from hymod.commands.common import (
    console,
    create_download_progress,
    find_entry,
    require_install_root,
    run_async,
)
from hymod.core.catalog import CatalogClient
from hymod.core.updates import ModEntry, check_all, check_mod, load_entries, update_all, update_mod
from hymod.models.status import UpdateStatus


async def _check_and_update(entry: ModEntry, on_progress) -> bool:
    await check_mod(entry, CatalogClient())
    if not entry.has_update:
        return False
    return await update_mod(entry, progress=on_progress)


@click.command()
@click.argument("mod_name")
@click.pass_context
def update(ctx: click.Context, mod_name: str):
    """Update an installed mod to the latest version.

    MOD_NAME is the mod's file name or display name.
    """
    install_root = require_install_root(ctx)
    entry = find_entry(load_entries(install_root), mod_name)

    if entry is None:
        console.print(f"[red]Error:[/red] Mod '{mod_name}' is not installed")
        raise SystemExit(1)

    if entry.status == UpdateStatus.NO_SOURCE:
        console.print(f"[yellow]{entry.name}[/yellow] has no catalog source, skipping")
        raise SystemExit(0)

    old_file = entry.mod.id

    with create_download_progress() as progress:
        task = progress.add_task(entry.name[:40], total=1.0)
        updated = run_async(
            _check_and_update(entry, lambda e, f: progress.update(task, completed=f))
        )

    if updated:
        console.print(f"\n[green]✓[/green] Updated [bold]{entry.name}[/bold]: {old_file} → {entry.mod.id}")
        return

    if entry.status == UpdateStatus.UP_TO_DATE:
        console.print(f"[green]{entry.name}[/green] is up to date ({entry.mod.version or entry.mod.id})")
    elif entry.status == UpdateStatus.UPDATE_AVAILABLE:
        console.print(f"[yellow]{entry.name}[/yellow] has an update but no direct download link")
        raise SystemExit(1)
    elif entry.status == UpdateStatus.NO_SOURCE:
        console.print(f"[yellow]{entry.name}[/yellow] was not found in the catalog")
    else:
        console.print(f"[red]Error:[/red] Could not update {entry.name}")
        raise SystemExit(1)


@click.command("upgrade-all")
@click.pass_context
def upgrade_all(ctx: click.Context):
    """Update all installed mods to their latest versions."""
    install_root = require_install_root(ctx)
    entries = load_entries(install_root)

    if not entries:
        console.print("No mods installed")
        raise SystemExit(0)

    console.print(f"[blue]Checking {len(entries)} mod(s) for updates...[/blue]\n")

    with create_download_progress() as progress:
        tasks = {}

        def on_progress(entry: ModEntry, fraction: float) -> None:
            if entry.mod.id not in tasks:
                tasks[entry.mod.id] = progress.add_task(entry.name[:40], total=1.0)
            progress.update(tasks[entry.mod.id], completed=fraction)

        async def _run():
            await check_all(entries, CatalogClient())
            return await update_all(entries, progress=on_progress)

        summary = run_async(_run())

    if summary.total == 0:
        console.print("[green]All mods are up to date![/green]")
        raise SystemExit(0)

    if summary.failed > 0:
        console.print(f"\n[yellow]{summary.message}[/yellow]")
        raise SystemExit(1)
    console.print(f"\n[green]✓[/green] {summary.message}")
