"""Catalog data models."""

from dataclasses import dataclass

CDN_BASE = "https://mediafilez.forgecdn.net/files"


def build_cdn_url(file_id: int, file_name: str) -> str | None:
    """Build a direct CDN download URL from a numeric file id.

    The id is split into its first four digits and the remainder, e.g.
    file 7649813 -> .../files/7649/813/<file_name>. Ids too short to split
    have no CDN URL.
    """
    digits = str(file_id)
    if len(digits) <= 4:
        return None
    return f"{CDN_BASE}/{digits[:4]}/{digits[4:]}/{file_name}"


@dataclass(frozen=True)
class LatestFile:
    """The latest file the catalog knows about for a mod."""

    file_name: str
    display_name: str
    download_url: str | None = None

    @classmethod
    def from_api_response(cls, data: dict) -> "LatestFile":
        """Create LatestFile from the "download" object of a CFWidget response."""
        name = data.get("name") or ""
        file_id = data.get("id") or 0

        download_url = None
        if name and isinstance(file_id, int) and file_id > 0:
            download_url = build_cdn_url(file_id, name)
        if download_url is None:
            download_url = data.get("url") or None

        return cls(
            file_name=name,
            display_name=data.get("display") or "",
            download_url=download_url,
        )
