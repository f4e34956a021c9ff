"""Download functionality with progress reporting."""

from pathlib import Path
from typing import Callable

import httpx

from hymod.core.http import get_http_client

CHUNK_SIZE = 81920

# Receives download progress as a fraction between 0.0 and 1.0
ProgressCallback = Callable[[float], None]


class DownloadError(Exception):
    """Error during download."""

    pass


async def download_file(
    url: str,
    dest: Path,
    progress: ProgressCallback | None = None,
    http: httpx.AsyncClient | None = None,
) -> Path:
    """Stream a file from URL to dest.

    Progress is reported after each chunk when the size is known. When the
    server sends no Content-Length, 1.0 is reported once at the end.

    Args:
        url: URL to download from
        dest: File path to write to (created or truncated)
        progress: Optional progress callback
        http: Client to use (defaults to the shared client)

    Returns:
        Path to downloaded file
    """
    http = http or get_http_client()

    async with http.stream("GET", url) as response:
        if response.status_code != 200:
            raise DownloadError(
                f"Failed to download {url}: HTTP {response.status_code}"
            )

        try:
            total = int(response.headers.get("content-length", 0))
        except ValueError:
            total = 0

        read = 0
        with open(dest, "wb") as f:
            async for chunk in response.aiter_bytes(chunk_size=CHUNK_SIZE):
                f.write(chunk)
                read += len(chunk)
                if progress and total > 0:
                    progress(min(read / total, 1.0))

    if progress and total <= 0:
        progress(1.0)

    return dest
