"""Game install root detection."""

import logging
import os
import platform
from pathlib import Path

from hymod.core.settings import Settings

logger = logging.getLogger(__name__)


def _common_paths(system: str) -> list[Path]:
    """Common Hytale install locations for an OS."""
    home = Path.home()

    if system == "windows":
        program_files = Path(os.environ.get("ProgramFiles", r"C:\Program Files"))
        program_files_x86 = Path(
            os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
        )
        local_app_data = Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
        return [
            program_files / "Hytale",
            program_files_x86 / "Hytale",
            local_app_data / "Programs" / "Hytale",
            Path("D:/Games/Hytale"),
            Path("C:/Games/Hytale"),
        ]
    if system == "darwin":
        return [
            home / "Library" / "Application Support" / "Hytale",
            Path("/Applications/Hytale"),
        ]
    return [
        home / ".local" / "share" / "Hytale",
        home / "Games" / "Hytale",
    ]


def is_valid_install(path: str | Path | None) -> bool:
    """A path is a valid install root if it is an existing directory."""
    if path is None or not str(path).strip():
        return False
    return Path(path).is_dir()


def detect_install_root(system: str | None = None) -> Path | None:
    """Find the game install root.

    Tries $HYMOD_GAME_DIR, then the common install paths for this OS.
    Does not look at saved settings.
    """
    env_path = os.environ.get("HYMOD_GAME_DIR")
    if is_valid_install(env_path):
        return Path(env_path)

    system = system or platform.system().lower()
    for candidate in _common_paths(system):
        if is_valid_install(candidate):
            return candidate

    return None


def resolve_install_root(settings: Settings, override: Path | None = None) -> Path | None:
    """Work out which install root to use.

    Order: explicit override, saved setting, auto-detection. A detected
    path is saved back to the settings.
    """
    if override is not None:
        return Path(override)

    if is_valid_install(settings.install_path):
        return Path(settings.install_path)

    detected = detect_install_root()
    if detected is not None:
        logger.info("Detected install root at %s", detected)
        settings.install_path = str(detected)
        settings.save()
    return detected
