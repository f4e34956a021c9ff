"""Configuration and path management for hymod."""

from pathlib import Path
from dataclasses import dataclass
import os


# Mods live in this subdirectory of the game install root
MODS_SUBPATH = Path("UserData") / "Mods"

# Previous versions of updated mods are kept here, next to the mods
ARCHIVE_DIR_NAME = "Archive"


@dataclass
class HymodConfig:
    """Configuration for hymod."""

    base_dir: Path
    settings_path: Path
    log_path: Path

    @classmethod
    def default(cls) -> "HymodConfig":
        """Create config with default paths."""
        base = Path(os.environ.get("HYMOD_HOME", Path.home() / ".hymod"))
        return cls(
            base_dir=base,
            settings_path=base / "settings.yaml",
            log_path=base / "hymod.log",
        )

    def ensure_dirs(self) -> None:
        """Ensure all required directories exist."""
        self.base_dir.mkdir(parents=True, exist_ok=True)


def mods_dir_for(install_root: Path) -> Path:
    """Get the mods directory for a game install root."""
    return Path(install_root) / MODS_SUBPATH


# Global config instance
_config: HymodConfig | None = None


def get_config() -> HymodConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = HymodConfig.default()
    return _config


def set_config(config: HymodConfig) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
