from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from ..errors import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download(
    url: str,
    dest: str,
    *,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    dry_run: bool = False,
) -> int:
    """Stream url into dest and return the number of bytes written.

    A partially written file is removed before DownloadError is raised.
    """

    logger.info("GET %s -> %s", url, dest)
    if dry_run:
        return 0

    http = session or requests
    written = 0
    try:
        with http.get(url, stream=True, timeout=timeout, allow_redirects=True) as r:
            r.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
    except (requests.RequestException, OSError) as e:
        Path(dest).unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e

    logger.info("Downloaded %d bytes from %s", written, url)
    return written
