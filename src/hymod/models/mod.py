"""Installed mod data model."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class Mod:
    """Represents one installed mod archive.

    Instances are snapshots: reloading a file builds a new Mod rather than
    changing an existing one.
    """

    id: str  # archive filename, unique within the mods directory
    name: str
    version: str
    file_path: Path
    installed_at: datetime
    description: str = ""
    authors: list[str] = field(default_factory=list)
    website: str = ""
    catalog_slug: str | None = None
    catalog_slug_is_guessed: bool = False

    @property
    def has_source(self) -> bool:
        """Whether the mod can be looked up in the catalog."""
        return self.catalog_slug is not None
