"""Persisted user settings."""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from hymod.core.config import get_config

logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1


@dataclass
class Settings:
    """User preferences kept across runs."""

    path: Path
    install_path: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from file.

        A missing or corrupt settings file gives fresh defaults.
        """
        path = path or get_config().settings_path
        if not path.exists():
            return cls(path=path)

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            return cls(path=path)

        if not isinstance(data, dict):
            return cls(path=path)

        install_path = data.get("install_path")
        return cls(
            path=path,
            install_path=install_path if isinstance(install_path, str) else None,
        )

    def save(self) -> bool:
        """Save settings to file. Returns False if the write failed."""
        data = {
            "version": SETTINGS_VERSION,
            "install_path": self.install_path,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.path, e)
            return False
        return True
