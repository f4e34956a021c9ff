"""Installing and replacing mod files.

Updates are done in an order that never loses data:

1. download the new file to ``<name>.tmp`` beside the mods
2. copy the current file into the ``Archive`` folder
3. move the temp file into place
4. remove the old file if its name differs

Until step 3 the original file is untouched. A failure in step 4 only
leaves an orphaned old file behind.
"""

import logging
import os
import shutil
from pathlib import Path

import httpx

from hymod.core.config import ARCHIVE_DIR_NAME
from hymod.core.downloader import ProgressCallback, download_file

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


class InstallError(Exception):
    """Error while installing a mod file."""

    pass


def check_file_name(file_name: str) -> None:
    """Reject names that are not a single plain file name.

    Names come from the catalog and must not point outside the mods folder.
    """
    if (
        not file_name
        or file_name in (".", "..")
        or "\\" in file_name
        or Path(file_name).name != file_name
    ):
        raise InstallError(f"Invalid mod file name: {file_name!r}")


def temp_path_for(dest: Path) -> Path:
    """Temp download path for a destination file."""
    return dest.with_name(dest.name + TEMP_SUFFIX)


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)


async def _download_to_temp(
    url: str,
    temp_path: Path,
    progress: ProgressCallback | None,
    http: httpx.AsyncClient | None,
) -> None:
    try:
        await download_file(url, temp_path, progress=progress, http=http)
    except BaseException:
        # Also runs on cancellation
        _discard(temp_path)
        raise


async def install_update(
    existing_path: Path,
    download_url: str,
    new_file_name: str,
    progress: ProgressCallback | None = None,
    http: httpx.AsyncClient | None = None,
) -> Path:
    """Replace an installed mod with a newly downloaded file.

    The previous file is copied into an ``Archive`` folder next to it,
    replacing an older backup with the same name.

    Args:
        existing_path: Currently installed mod archive
        download_url: Direct download URL for the new version
        new_file_name: Filename to install the new version as
        progress: Optional download progress callback
        http: Client to use (defaults to the shared client)

    Returns:
        Path to the newly installed file

    Raises:
        InstallError: If new_file_name is not a plain file name
    """
    check_file_name(new_file_name)
    existing_path = Path(existing_path)
    mods_dir = existing_path.parent
    archive_dir = mods_dir / ARCHIVE_DIR_NAME
    archive_dir.mkdir(parents=True, exist_ok=True)

    new_path = mods_dir / new_file_name
    temp_path = temp_path_for(new_path)

    await _download_to_temp(download_url, temp_path, progress, http)

    try:
        shutil.copy2(existing_path, archive_dir / existing_path.name)
        os.replace(temp_path, new_path)
    except BaseException:
        _discard(temp_path)
        raise

    # Same name means os.replace already overwrote the old file
    if str(existing_path).lower() != str(new_path).lower():
        try:
            existing_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Installed %s but could not remove old file %s: %s",
                           new_file_name, existing_path.name, e)

    logger.info("Installed %s (previous: %s)", new_file_name, existing_path.name)
    return new_path


async def install_new(
    mods_dir: Path,
    download_url: str,
    file_name: str,
    progress: ProgressCallback | None = None,
    http: httpx.AsyncClient | None = None,
) -> Path:
    """Download and install a mod that isn't installed yet.

    Raises InstallError if file_name is not a plain file name or a file with
    the same name already exists.

    Returns:
        Path to the installed file
    """
    check_file_name(file_name)
    mods_dir = Path(mods_dir)
    mods_dir.mkdir(parents=True, exist_ok=True)

    dest = mods_dir / file_name
    temp_path = temp_path_for(dest)

    await _download_to_temp(download_url, temp_path, progress, http)

    try:
        if dest.exists():
            raise InstallError(f"{file_name} is already installed")
        temp_path.rename(dest)
    except BaseException:
        _discard(temp_path)
        raise

    logger.info("Installed new mod %s", file_name)
    return dest
