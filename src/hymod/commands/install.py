"""Install command implementation."""

import click
import httpx

from hymod.commands.common import console, create_download_progress, require_install_root, run_async
from hymod.core.catalog import CatalogClient, CatalogError
from hymod.core.downloader import DownloadError
from hymod.core.installer import InstallError
from hymod.core.updates import install_from_catalog


@click.command()
@click.argument("mod_url")
@click.pass_context
def install(ctx: click.Context, mod_url: str):
    """Install a mod from its CurseForge page.

    MOD_URL is the mod page, e.g. https://www.curseforge.com/hytale/mods/<slug>
    """
    install_root = require_install_root(ctx)

    console.print("[blue]Fetching mod info...[/blue]")

    with create_download_progress() as progress:
        task = progress.add_task("Downloading", total=1.0)

        def on_progress(fraction: float) -> None:
            progress.update(task, completed=fraction)

        try:
            path = run_async(
                install_from_catalog(mod_url, install_root, CatalogClient(), progress=on_progress)
            )
        except InstallError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except (CatalogError, DownloadError, httpx.HTTPError, OSError) as e:
            console.print(f"[red]Download failed:[/red] {e}")
            raise SystemExit(1)

    console.print(f'\n[green]✓[/green] Installed "{path.name}" successfully.')
