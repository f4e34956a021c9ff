"""Data models for hymod."""

from hymod.models.mod import Mod
from hymod.models.manifest import ModManifest, ModAuthor
from hymod.models.catalog import LatestFile
from hymod.models.status import UpdateStatus

__all__ = ["Mod", "ModManifest", "ModAuthor", "LatestFile", "UpdateStatus"]
