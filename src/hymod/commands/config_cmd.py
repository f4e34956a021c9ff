"""Config command implementation."""

from pathlib import Path

import click

from hymod.commands.common import console, mods_dir_hint
from hymod.core.platform import is_valid_install


@click.command("config")
@click.option(
    "--set-install-path",
    "install_path",
    type=click.Path(path_type=Path),
    help="Save the Hytale install path",
)
@click.pass_context
def config(ctx: click.Context, install_path: Path | None):
    """Show or change saved settings."""
    settings = ctx.obj["settings"]

    if install_path is not None:
        if not is_valid_install(install_path):
            console.print(f"[red]Error:[/red] {install_path} is not a directory")
            raise SystemExit(1)
        settings.install_path = str(install_path.resolve())
        if not settings.save():
            console.print(f"[red]Error:[/red] Could not write {settings.path}")
            raise SystemExit(1)
        console.print(f"[green]✓[/green] Install path set to [bold]{settings.install_path}[/bold]")
        return

    install_root = ctx.obj.get("install_root")
    console.print(f"[bold]Settings file:[/bold] {settings.path}")
    if install_root is None:
        console.print("[bold]Install path:[/bold] [yellow]not configured[/yellow]")
    else:
        valid = "" if is_valid_install(install_root) else " [red](missing)[/red]"
        console.print(f"[bold]Install path:[/bold] {install_root}{valid}")
        console.print(mods_dir_hint(install_root))
