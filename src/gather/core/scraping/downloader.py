"""Downloader: copy one remote body to one local path.

The body is streamed in chunks so large files never sit in memory. A SHA-256
digest and the byte count are computed while writing and returned with the
destination path so callers can log or verify what landed on disk.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Dict, Optional

import requests
from prefect.logging import get_logger

from gather.core.errors import DownloadError
from gather.core.scraping.fetcher import Fetcher
from gather.core.scraping.progress import DEFAULT_INTERVAL, ProgressTracker

logger = get_logger(__name__)

CHUNK_SIZE = 8192


def _content_length(resp) -> Optional[int]:
    raw = resp.headers.get("Content-Length")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


class Downloader:
    """Download a single URL to a given path and return metadata about it.

    A `Fetcher` can be injected, which lets tests hand in a fake that returns
    canned responses.
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        track_interval: float = DEFAULT_INTERVAL,
    ):
        self.fetcher = fetcher or Fetcher()
        self.track_interval = track_interval

    def download(self, url: str, path: str) -> Dict[str, str]:
        """Stream `url` into `path`.

        Raises `TransportError` when the request fails or is not 2xx, and
        `DownloadError` when the local file can't be written or the body
        breaks off mid-copy.
        """
        logger.info("Downloading %s to %s", url, path)
        out_path = Path(path)

        with self.fetcher.open_stream(url) as resp:
            hasher = hashlib.sha256()
            total = 0
            tracker = ProgressTracker(
                str(out_path), _content_length(resp), self.track_interval
            )
            try:
                out_path.parent.mkdir(parents=True, exist_ok=True)
                with open(out_path, "wb") as fh:
                    tracker.start()
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        hasher.update(chunk)
                        total += len(chunk)
            except (OSError, requests.RequestException) as exc:
                raise DownloadError(url, str(out_path), str(exc)) from exc
            finally:
                tracker.stop()

            status_code = resp.status_code

        logger.info("Finished downloading %s (%d bytes)", url, total)
        return {
            "path": str(out_path),
            "url": url,
            "sha256": hasher.hexdigest(),
            "size": str(total),
            "status_code": str(status_code),
        }
