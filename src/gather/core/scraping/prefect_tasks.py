"""Prefect tasks wrapping the scraping components.

Each task is a thin adapter around a core component (scrape a listing,
download a file) that adds run logging. None of them retry: a failed fetch
or download ends the run.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from prefect import get_run_logger, task

from gather.core.scraping.downloader import Downloader
from gather.core.scraping.fetcher import Fetcher
from gather.core.scraping.scrape import files_to_scrape


@task(name="scrape_listing", retries=0)
def scrape_task(
    uri: str, pattern: str, which: str, timeout: Optional[float] = None
) -> List[str]:
    logger = get_run_logger()
    logger.info("Scraping %s for %r (which=%s)", uri, pattern, which)
    files = files_to_scrape(uri, pattern, which, Fetcher(timeout=timeout))
    logger.info("Files to scrape: %s", files)
    return files


@task(name="download_file", retries=0)
def download_file_task(
    file_url: str,
    path: str,
    timeout: Optional[float] = None,
    track_interval: float = 10.0,
) -> Dict[str, str]:
    logger = get_run_logger()
    d = Downloader(Fetcher(timeout=timeout), track_interval=track_interval)
    info = d.download(file_url, path)
    logger.info(
        "Saved %s (size=%s bytes, sha256=%s)",
        info.get("path"),
        info.get("size"),
        info.get("sha256"),
    )
    return info
