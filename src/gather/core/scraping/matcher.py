"""Pattern matching over listing text.

Scans a listing line by line and collects every non-overlapping match of a
regular expression, in the order they appear.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Union

import requests
from prefect.logging import get_logger

from gather.core.errors import PatternError, ScanError

logger = get_logger(__name__)

Line = Union[str, bytes]


def compile_pattern(pattern: str) -> "re.Pattern[str]":
    """Compile `pattern`, raising `PatternError` when the syntax is invalid."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def _decode(line: Line) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def extract_matches(
    pattern: Union[str, "re.Pattern[str]"], lines: Iterable[Line]
) -> List[str]:
    """Return all matches of `pattern` found in `lines`.

    - Every non-overlapping match on a line is kept, not just the first.
    - Matches are ordered by line, then by position within the line.
    - Empty matches are skipped.

    If the line source fails while being read the matches gathered so far are
    dropped and `ScanError` is raised.
    """
    regex = compile_pattern(pattern) if isinstance(pattern, str) else pattern
    matches: List[str] = []

    try:
        for line in lines:
            found = [m.group(0) for m in regex.finditer(_decode(line)) if m.group(0)]
            if found:
                logger.debug("Matches found: %s", found)
                matches.extend(found)
    except (OSError, requests.RequestException) as exc:
        raise ScanError(str(exc)) from exc

    return matches
