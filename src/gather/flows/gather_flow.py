"""The gather flow.

1. Validate the job config (simple download or scrape).
2. For a scrape job, scrape the listing and turn the selected names into
   locators. A simple job has exactly one locator, its URI.
3. Download every locator in order. With more than one locator, each output
   path gets a numeric suffix (`out.gz` -> `out_0.gz`, `out_1.gz`, ...).

Any failure ends the flow with the error that caused it.
"""

from __future__ import annotations

import time
from typing import Dict, List, Optional, Union

from prefect import flow, get_run_logger

from gather.core.config import GatherConfig, ScrapeJob, parse_config
from gather.core.scraping.locators import output_paths
from gather.core.scraping.prefect_tasks import download_file_task, scrape_task


def download_files(
    uris: List[str], save_as: str, timeout: Optional[float] = None
) -> List[Dict[str, str]]:
    """Download each of `uris` to its own path derived from `save_as`."""
    infos: List[Dict[str, str]] = []
    for uri, path in zip(uris, output_paths(save_as, len(uris))):
        infos.append(download_file_task(uri, path, timeout=timeout))
    return infos


@flow(name="gather", log_prints=True, validate_parameters=False)
def gather_flow(config: Union[dict, GatherConfig]) -> List[Dict[str, str]]:
    """Run one gather job and return the metadata of every download."""
    logger = get_run_logger()
    started = time.monotonic()

    if not isinstance(config, GatherConfig):
        config = parse_config(config)
    job = config.job

    if isinstance(job, ScrapeJob):
        uris = scrape_task(job.uri, job.pattern, job.which, timeout=config.timeout)
    else:
        logger.info("File to download: %s", job.uri)
        uris = [job.uri]

    if not uris:
        logger.warning("Nothing matched in %s; no files downloaded", job.uri)

    infos = download_files(uris, config.save_as, timeout=config.timeout)
    logger.info(
        "Process completed in %.2fs, %d file(s) downloaded",
        time.monotonic() - started,
        len(infos),
    )
    return infos
