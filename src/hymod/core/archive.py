"""Reading manifests embedded in mod archives."""

import json
import logging
import zipfile
from pathlib import Path, PurePosixPath

from hymod.models.manifest import ModManifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"

# Archive extensions recognised as mods (both are zip containers)
SUPPORTED_EXTENSIONS = (".jar", ".zip")


def is_mod_archive(path: Path) -> bool:
    """Check if a path looks like a mod archive by extension."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def find_manifest_entry(zf: zipfile.ZipFile) -> zipfile.ZipInfo | None:
    """Find the manifest entry in an archive, matching the name case-insensitively."""
    for info in zf.infolist():
        if info.is_dir():
            continue
        if PurePosixPath(info.filename).name.lower() == MANIFEST_FILENAME:
            return info
    return None


def read_manifest(archive_path: Path) -> ModManifest | None:
    """Read the manifest from a mod archive.

    Returns None when the archive has no manifest. Unreadable archives and
    malformed manifests are also treated as having none.
    """
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            entry = find_manifest_entry(zf)
            if entry is None:
                return None
            raw = zf.read(entry)

        data = json.loads(raw.decode("utf-8-sig"))
        return ModManifest.from_json(data)

    except Exception as e:
        # One broken archive must not stop discovery of the others
        logger.debug("No usable manifest in %s: %s", archive_path.name, e)
        return None
