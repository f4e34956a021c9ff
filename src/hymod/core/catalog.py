"""Catalog client for looking up the latest mod files.

Uses the keyless CFWidget API, which mirrors CurseForge project data.
"""

import logging
from urllib.parse import quote

import httpx

from hymod.core.http import get_http_client
from hymod.models.catalog import LatestFile

logger = logging.getLogger(__name__)

CATALOG_API_BASE = "https://api.cfwidget.com"
GAME_PATH = "hytale/mods"


class CatalogError(Exception):
    """Error from the catalog API."""

    pass


class CatalogClient:
    """Client for looking up mods in the catalog."""

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        base_url: str = CATALOG_API_BASE,
    ):
        self._http = http
        self.base_url = base_url.rstrip("/")

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http if self._http is not None else get_http_client()

    def mod_url(self, slug: str) -> str:
        """API URL for a mod slug."""
        return f"{self.base_url}/{GAME_PATH}/{quote(slug, safe='')}"

    async def get_latest_file(self, slug: str) -> LatestFile | None:
        """Get the latest file for a mod.

        Returns None if the catalog has no such mod or no file for it.
        Raises CatalogError if the catalog can't be reached.
        """
        url = self.mod_url(slug)
        try:
            response = await self.http.get(url)
        except httpx.HTTPError as e:
            raise CatalogError(f"Failed to reach catalog for '{slug}': {e}") from e

        if response.status_code == 404:
            logger.debug("Catalog has no entry for '%s'", slug)
            return None
        if response.status_code != 200:
            raise CatalogError(
                f"Catalog lookup for '{slug}' failed: HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogError(f"Invalid catalog response for '{slug}': {e}") from e

        download = data.get("download") if isinstance(data, dict) else None
        if not isinstance(download, dict):
            return None

        return LatestFile.from_api_response(download)
