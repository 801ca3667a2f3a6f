"""Scrape a listing for names and turn the selection into locators.

The pipeline is strictly sequential: the pattern is compiled, the listing is
fetched, every line is scanned, and only then is the selection made.
"""

from __future__ import annotations

from typing import List, Optional

from prefect.logging import get_logger

from gather.core.scraping.fetcher import Fetcher
from gather.core.scraping.locators import join_locator
from gather.core.scraping.matcher import compile_pattern, extract_matches
from gather.core.scraping.selector import select

logger = get_logger(__name__)


def scrape_matches(
    uri: str, pattern: str, which: str, fetcher: Optional[Fetcher] = None
) -> List[str]:
    """Return the names in the listing at `uri` selected by `which`.

    Raises `PatternError` before any request is made when `pattern` does not
    compile, `TransportError` when the listing can't be fetched, and
    `ScanError` when the listing breaks off while being read.
    """
    regex = compile_pattern(pattern)
    fetcher = fetcher or Fetcher()

    with fetcher.open_lines(uri) as lines:
        matches = extract_matches(regex, lines)

    logger.debug("Found %d match(es) for %r in %s", len(matches), pattern, uri)
    return select(matches, which)


def files_to_scrape(
    uri: str, pattern: str, which: str, fetcher: Optional[Fetcher] = None
) -> List[str]:
    """Scrape `uri` and return fetchable locators for the selected names."""
    names = scrape_matches(uri, pattern, which, fetcher)
    return [join_locator(uri, name) for name in names]
