"""Helpers shared by commands."""

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from hymod.core.config import mods_dir_for
from hymod.core.http import close_http_client
from hymod.core.updates import ModEntry
from hymod.models.status import UpdateStatus

console = Console()

STATUS_STYLES = {
    UpdateStatus.UNKNOWN: "dim",
    UpdateStatus.CHECKING: "blue",
    UpdateStatus.UP_TO_DATE: "green",
    UpdateStatus.UPDATE_AVAILABLE: "yellow",
    UpdateStatus.DOWNLOADING: "blue",
    UpdateStatus.NO_SOURCE: "dim",
    UpdateStatus.ERROR: "red",
}


def require_install_root(ctx: click.Context) -> Path:
    """Get the install root or exit with an error."""
    install_root = ctx.obj.get("install_root")
    if install_root is None:
        console.print("[red]Error:[/red] Hytale install path is not configured.")
        console.print("\nSet it with: hymod config --set-install-path <path>")
        raise SystemExit(1)
    return install_root


def format_status(status: UpdateStatus) -> str:
    style = STATUS_STYLES.get(status, "")
    return f"[{style}]{status.label}[/{style}]" if style else status.label


def find_entry(entries: list[ModEntry], query: str) -> ModEntry | None:
    """Find an entry by file name, then by mod name (case-insensitive)."""
    query = query.lower()
    for entry in entries:
        if entry.mod.id.lower() == query:
            return entry
    for entry in entries:
        if entry.mod.name.lower() == query:
            return entry
    return None


def run_async(coro):
    """Run a coroutine, closing the shared HTTP client afterwards."""

    async def _main():
        try:
            return await coro
        finally:
            await close_http_client()

    return asyncio.run(_main())


def create_download_progress() -> Progress:
    """Create a progress bar for downloads."""
    return Progress(
        TextColumn("[bold blue]{task.description}", justify="right"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        console=console,
    )


def mods_dir_hint(install_root: Path) -> str:
    return f"[dim]Mods folder: {mods_dir_for(install_root)}[/dim]"
