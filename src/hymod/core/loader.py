"""Discovering installed mods and resolving their identity."""

import logging
import re
from datetime import datetime
from pathlib import Path

from hymod.core.archive import is_mod_archive, read_manifest
from hymod.core.config import mods_dir_for
from hymod.core.filename import parse_stem
from hymod.models.mod import Mod

logger = logging.getLogger(__name__)

# Extracts the slug from a catalog mod page URL
CATALOG_SLUG_PATTERN = re.compile(
    r"curseforge\.com/hytale/mods/(?P<slug>[^/?#]+)", re.IGNORECASE
)

SLUG_SEPARATORS = (" ", "-", "_")


def extract_catalog_slug(url: str | None) -> str | None:
    """Extract the mod slug from a catalog URL, or None."""
    if not url or not url.strip():
        return None
    match = CATALOG_SLUG_PATTERN.search(url)
    return match.group("slug") if match else None


def slug_from_name(name: str | None) -> str | None:
    """Convert a mod name to a kebab-case slug.

    e.g. "Violet's Music Players" -> "violets-music-players". Characters
    other than letters, digits and separators are dropped.
    """
    if not name or not name.strip():
        return None

    chars = []
    prev_hyphen = True  # suppresses leading hyphens
    for c in name.lower():
        if c.isalnum():
            chars.append(c)
            prev_hyphen = False
        elif c in SLUG_SEPARATORS and not prev_hyphen:
            chars.append("-")
            prev_hyphen = True

    slug = "".join(chars).rstrip("-")
    return slug or None


def _modified_at(path: Path) -> datetime:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime)
    except OSError:
        return datetime.fromtimestamp(0)


def load_mod(file_path: Path) -> Mod:
    """Resolve the identity of one mod archive.

    Never raises: missing or broken metadata falls back to what the
    filename says.
    """
    file_path = Path(file_path)
    manifest = read_manifest(file_path)

    # Filename versions win; manifest versions are often placeholders
    fallback_name, fallback_version = parse_stem(file_path.stem)

    name = fallback_name
    if manifest and manifest.name and manifest.name.strip():
        name = manifest.name

    version = fallback_version
    if not version and manifest and manifest.version:
        version = manifest.version

    website = (manifest.website if manifest else None) or ""

    slug = extract_catalog_slug(website)
    slug_guessed = False
    if slug is None:
        slug = slug_from_name(name)
        slug_guessed = slug is not None

    return Mod(
        id=file_path.name,
        name=name,
        version=version,
        description=(manifest.description if manifest else None) or "",
        authors=manifest.author_names if manifest else [],
        website=website,
        catalog_slug=slug,
        catalog_slug_is_guessed=slug_guessed,
        file_path=file_path,
        installed_at=_modified_at(file_path),
    )


def list_mod_files(mods_dir: Path) -> list[Path]:
    """List mod archives directly inside a directory, sorted by filename."""
    if not mods_dir.is_dir():
        return []

    files = [p for p in mods_dir.iterdir() if p.is_file() and is_mod_archive(p)]
    files.sort(key=lambda p: p.name.lower())
    return files


def load_from_directory(install_root: Path) -> list[Mod]:
    """Load every mod installed under a game install root.

    A missing mods directory gives an empty list.
    """
    mods_dir = mods_dir_for(install_root)
    mods = [load_mod(path) for path in list_mod_files(mods_dir)]
    logger.debug("Loaded %d mod(s) from %s", len(mods), mods_dir)
    return mods
