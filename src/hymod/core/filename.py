"""Name and version parsing from mod filenames."""

import re
from pathlib import PurePath

# Splits a filename stem into a display name and a version, e.g.
# "My_Mod-1.2.3" -> ("My_Mod", "1.2.3"). Trailing text after whitespace is dropped.
NAME_VERSION_PATTERN = re.compile(
    r"^(?P<name>.+?)[\-_ ]v?(?P<version>\d+[\d.\-]*)(\s.*)?$"
)

# Pulls only the version token out of a filename stem, e.g.
# "cool-mod-v2.0-forge" -> "2.0". Used when comparing local and remote files.
FILE_VERSION_PATTERN = re.compile(
    r"[\-_ ][vV]?(?P<version>\d+[\d.\-]*)(?:[\-_ ].*)?$"
)


def humanize(text: str) -> str:
    """Turn separators into spaces."""
    return text.replace("_", " ").replace("-", " ").strip()


def parse_stem(stem: str) -> tuple[str, str]:
    """Split a filename stem into (name, version).

    Returns the humanized stem and an empty version when no version is found.
    """
    match = NAME_VERSION_PATTERN.match(stem)
    if match:
        return humanize(match.group("name")), match.group("version")
    return humanize(stem), ""


def parse_version_from_filename(filename: str) -> str | None:
    """Extract the version token from a filename, or None."""
    stem = PurePath(filename).stem
    match = FILE_VERSION_PATTERN.search(stem)
    return match.group("version") if match else None


def normalize_version(version: str) -> str:
    """Normalize a version for equality checks."""
    return version.lstrip("vV").lower()
