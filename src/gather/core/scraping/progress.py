"""Best-effort download progress logging.

`ProgressTracker` runs a daemon thread that samples the size of the file
being written and logs how far along the download is. It is not
synchronized with the copy: it may log a partial or the final size, and if
the file disappears it logs an error and stops. Nothing it does is reported
back to the downloader.
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from prefect.logging import get_logger

logger = get_logger(__name__)

DEFAULT_INTERVAL = 10.0


class ProgressTracker:
    def __init__(
        self,
        path: str,
        content_length: Optional[int],
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.path = path
        self.content_length = content_length
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def trackable(self) -> bool:
        return self.content_length is not None and self.content_length > 0

    def start(self) -> "ProgressTracker":
        if not self.trackable:
            logger.info("Content-Length not available, can't track download")
            return self

        self._thread = threading.Thread(
            target=self._poll, name=f"progress:{self.path}", daemon=True
        )
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _poll(self) -> None:
        size = 0
        while size < self.content_length:
            if self._stop.wait(self.interval):
                return
            try:
                size = os.stat(self.path).st_size
            except OSError:
                logger.error("Couldn't get info on file %s to track", self.path)
                return
            progress = size / self.content_length * 100
            logger.info("Download progress: %.2f%%", progress)
