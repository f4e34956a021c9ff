"""CLI entry point for hymod."""

from pathlib import Path

import click

from hymod import __version__
from hymod.commands import config_cmd, info, install, list_cmd, outdated, update
from hymod.core.config import get_config
from hymod.core.log import setup_logging
from hymod.core.platform import resolve_install_root
from hymod.core.settings import Settings


@click.group()
@click.version_option(version=__version__, prog_name="hymod")
@click.option(
    "--install-path",
    envvar="HYMOD_INSTALL_PATH",
    type=click.Path(path_type=Path),
    help="Hytale install directory (overrides the saved setting)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show log output")
@click.pass_context
def main(ctx: click.Context, install_path: Path | None, verbose: bool):
    """Hymod - A mod manager for Hytale.

    Finds the mods in your Hytale install, checks CurseForge for newer
    versions and updates them, keeping a backup of each replaced file.

    Examples:

        hymod list

        hymod outdated

        hymod update "Violet's Music Players"

        hymod install https://www.curseforge.com/hytale/mods/some-mod
    """
    config = get_config()
    try:
        config.ensure_dirs()
    except OSError:
        # Runs without a log file or saved settings
        pass
    setup_logging(config.log_path, verbose)

    settings = Settings.load(config.settings_path)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["install_root"] = resolve_install_root(settings, install_path)


# Register commands
main.add_command(list_cmd.list_mods)
main.add_command(info.info)
main.add_command(outdated.outdated)
main.add_command(update.update)
main.add_command(update.upgrade_all)
main.add_command(install.install)
main.add_command(config_cmd.config)


if __name__ == "__main__":
    main()
