"""Update checking and installation for installed mods."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

import httpx

from hymod.core.config import mods_dir_for
from hymod.core.filename import normalize_version, parse_version_from_filename
from hymod.core.installer import InstallError, check_file_name, install_new, install_update
from hymod.core.loader import extract_catalog_slug, load_from_directory, load_mod
from hymod.models.catalog import LatestFile
from hymod.models.mod import Mod
from hymod.models.status import UpdateStatus

logger = logging.getLogger(__name__)


class Catalog(Protocol):
    async def get_latest_file(self, slug: str) -> LatestFile | None: ...


# Called with (entry, old_status, new_status) whenever an entry's status changes
StatusListener = Callable[["ModEntry", UpdateStatus, UpdateStatus], None]

# Called with (entry, fraction) while an entry's update downloads
EntryProgressCallback = Callable[["ModEntry", float], None]


class ModEntry:
    """Tracks the update state of one installed mod.

    Only one check or update may run on an entry at a time.
    """

    def __init__(self, mod: Mod, listener: StatusListener | None = None):
        self.mod = mod
        self.latest_version = ""
        self.latest_file: LatestFile | None = None
        self.download_progress = 0.0
        self._listener = listener
        self._status = (
            UpdateStatus.UNKNOWN if mod.has_source else UpdateStatus.NO_SOURCE
        )

    def __repr__(self) -> str:
        return f"ModEntry({self.mod.id!r}, {self._status.value})"

    @property
    def status(self) -> UpdateStatus:
        return self._status

    @status.setter
    def status(self, value: UpdateStatus) -> None:
        old = self._status
        self._status = value
        if self._listener and old != value:
            self._listener(self, old, value)

    @property
    def name(self) -> str:
        return self.mod.name

    @property
    def has_update(self) -> bool:
        return self._status == UpdateStatus.UPDATE_AVAILABLE

    def reload(self, file_path: Path) -> Mod:
        """Replace the mod snapshot with a fresh read of file_path."""
        self.mod = load_mod(file_path)
        return self.mod


@dataclass
class CheckSummary:
    """Outcome counts of a batch update check."""

    checked: int
    updates: int
    up_to_date: int
    errors: int

    @property
    def message(self) -> str:
        if self.updates > 0:
            return f"{self.updates} update(s) available."
        if self.errors > 0:
            return f"Check complete - {self.errors} mod(s) could not be reached."
        return "All mods are up to date."


@dataclass
class UpdateSummary:
    """Outcome counts of a batch update."""

    total: int
    succeeded: int
    failed: int

    @property
    def message(self) -> str:
        if self.failed > 0:
            return f"Updated {self.succeeded}/{self.total} mod(s). {self.failed} failed."
        return f"Successfully updated {self.succeeded} mod(s)."


def load_entries(
    install_root: Path | None, listener: StatusListener | None = None
) -> list[ModEntry]:
    """Load entries for every mod under an install root."""
    if install_root is None:
        return []
    return [ModEntry(mod, listener) for mod in load_from_directory(install_root)]


def latest_version_of(latest: LatestFile) -> str:
    """Version shown for a catalog file: from its filename, else its display name."""
    return parse_version_from_filename(latest.file_name) or latest.display_name


def is_up_to_date(local_id: str, latest: LatestFile) -> bool:
    """Decide whether an installed file matches the catalog's latest file.

    Filenames are compared rather than manifest versions, which are often
    unset or stale.
    """
    if latest.file_name.lower() == local_id.lower():
        return True

    local_version = parse_version_from_filename(local_id)
    remote_version = parse_version_from_filename(latest.file_name)
    if local_version is None or remote_version is None:
        return False
    return normalize_version(local_version) == normalize_version(remote_version)


def _unreachable_status(mod: Mod) -> UpdateStatus:
    # A guessed slug finding nothing is expected; a declared one is a failure
    return UpdateStatus.NO_SOURCE if mod.catalog_slug_is_guessed else UpdateStatus.ERROR


async def check_mod(entry: ModEntry, catalog: Catalog) -> UpdateStatus:
    """Check one mod against the catalog and update its status.

    Cancellation puts the entry back to UNKNOWN and is re-raised.
    """
    mod = entry.mod
    if mod.catalog_slug is None:
        entry.status = UpdateStatus.NO_SOURCE
        return entry.status

    entry.status = UpdateStatus.CHECKING
    try:
        latest = await catalog.get_latest_file(mod.catalog_slug)
    except asyncio.CancelledError:
        entry.status = UpdateStatus.UNKNOWN
        raise
    except Exception as e:
        logger.error("Update check failed for mod '%s' (slug: %s): %s",
                     mod.name, mod.catalog_slug, e)
        entry.status = _unreachable_status(mod)
        return entry.status

    # A file without a name can't be compared or installed
    if latest is None or not latest.file_name:
        entry.status = _unreachable_status(mod)
        return entry.status

    entry.latest_version = latest_version_of(latest)

    if is_up_to_date(mod.id, latest):
        entry.latest_file = None
        entry.status = UpdateStatus.UP_TO_DATE
    else:
        local_version = parse_version_from_filename(mod.id)
        logger.info("Update available for '%s': local=%s, latest=%s (%s).",
                    mod.name, local_version or mod.id, entry.latest_version,
                    latest.file_name)
        # Kept so the update can run without a second lookup
        entry.latest_file = latest
        entry.status = UpdateStatus.UPDATE_AVAILABLE

    return entry.status


async def check_all(entries: list[ModEntry], catalog: Catalog) -> CheckSummary:
    """Check every mod that has a catalog slug, concurrently."""
    targets = [e for e in entries if e.mod.has_source]
    logger.info("Update check started for %d mod(s) (%d total loaded).",
                len(targets), len(entries))

    await asyncio.gather(*(check_mod(e, catalog) for e in targets))

    summary = CheckSummary(
        checked=len(targets),
        updates=sum(1 for e in targets if e.status == UpdateStatus.UPDATE_AVAILABLE),
        up_to_date=sum(1 for e in targets if e.status == UpdateStatus.UP_TO_DATE),
        errors=sum(
            1 for e in targets
            if e.status in (UpdateStatus.ERROR, UpdateStatus.NO_SOURCE)
        ),
    )
    logger.info("Update check complete: %d update(s) available, %d up to date, %d error(s).",
                summary.updates, summary.up_to_date, summary.errors)
    return summary


async def update_mod(
    entry: ModEntry,
    progress: EntryProgressCallback | None = None,
    http: httpx.AsyncClient | None = None,
) -> bool:
    """Install the update found by the last check. Returns True if updated.

    Cancellation puts the entry back to UPDATE_AVAILABLE and is re-raised.
    """
    latest = entry.latest_file
    if not entry.has_update or latest is None or not latest.download_url:
        return False

    entry.status = UpdateStatus.DOWNLOADING
    entry.download_progress = 0.0

    def on_progress(fraction: float) -> None:
        entry.download_progress = fraction
        if progress:
            progress(entry, fraction)

    try:
        new_path = await install_update(
            entry.mod.file_path,
            latest.download_url,
            latest.file_name,
            progress=on_progress,
            http=http,
        )
    except asyncio.CancelledError:
        entry.status = UpdateStatus.UPDATE_AVAILABLE
        raise
    except Exception as e:
        logger.error("Failed to update mod '%s' from %s: %s",
                     entry.name, latest.download_url, e)
        entry.status = UpdateStatus.ERROR
        return False
    finally:
        entry.download_progress = 0.0

    entry.reload(new_path)
    entry.latest_file = None
    entry.status = UpdateStatus.UP_TO_DATE
    return True


async def update_all(
    entries: list[ModEntry],
    progress: EntryProgressCallback | None = None,
    http: httpx.AsyncClient | None = None,
) -> UpdateSummary:
    """Update every entry with an update available, concurrently."""
    targets = [e for e in entries if e.has_update]
    await asyncio.gather(*(update_mod(e, progress, http) for e in targets))

    return UpdateSummary(
        total=len(targets),
        succeeded=sum(1 for e in targets if e.status == UpdateStatus.UP_TO_DATE),
        failed=sum(1 for e in targets if e.status == UpdateStatus.ERROR),
    )


async def install_from_catalog(
    mod_url: str,
    install_root: Path,
    catalog: Catalog,
    progress: Callable[[float], None] | None = None,
    http: httpx.AsyncClient | None = None,
) -> Path:
    """Install a mod that isn't installed yet from its catalog page URL.

    Raises InstallError if the URL isn't a catalog mod URL, the catalog has
    no downloadable file or the file is already installed.
    """
    slug = extract_catalog_slug(mod_url)
    if slug is None:
        raise InstallError("Not a valid CurseForge mod URL.")

    latest = await catalog.get_latest_file(slug)
    if latest is None or not latest.file_name or not latest.download_url:
        raise InstallError("Could not find a downloadable file for this mod.")

    check_file_name(latest.file_name)
    mods_dir = mods_dir_for(install_root)
    if (mods_dir / latest.file_name).exists():
        raise InstallError(f'"{latest.file_name}" is already installed.')

    try:
        return await install_new(
            mods_dir, latest.download_url, latest.file_name, progress=progress, http=http
        )
    except Exception as e:
        if not isinstance(e, InstallError):
            logger.error("Mod install failed for %s: %s", mod_url, e)
        raise
