"""Choose which scraped names to download.

Names are deduplicated and sorted before a selection policy picks from them,
so "first" and "last" refer to the sorted order, not discovery order.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from prefect.logging import get_logger

logger = get_logger(__name__)

# Returned for an unrecognized policy when there is at least one candidate.
PLACEHOLDER = ""


class SelectionPolicy(str, Enum):
    ALL = "all"
    FIRST = "first"
    LAST = "last"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SelectionPolicy"]:
        """Case-insensitive lookup; None when `value` names no policy."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return None


def unique_strings(items: Iterable[str]) -> List[str]:
    """Drop repeated strings, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


def pick_which_strings(items: List[str], which: Optional[str]) -> List[str]:
    """Pick from already sorted, distinct `items` by policy name.

        "all"   -> every item
        "first" -> the first item
        "last"  -> the last item

    Any other name yields a single empty-string placeholder. An empty input
    always yields an empty list.
    """
    if not items:
        return []

    policy = SelectionPolicy.parse(which)
    if policy is SelectionPolicy.ALL:
        return list(items)
    if policy is SelectionPolicy.FIRST:
        return [items[0]]
    if policy is SelectionPolicy.LAST:
        return [items[-1]]

    logger.warning(
        "Unknown selection policy %r; expected one of %s",
        which,
        ", ".join(p.value for p in SelectionPolicy),
    )
    return [PLACEHOLDER]


def select(matches: Iterable[str], which: Optional[str]) -> List[str]:
    """Deduplicate, sort and apply the `which` policy to `matches`."""
    candidates = sorted(unique_strings(matches))
    picked = pick_which_strings(candidates, which)
    logger.debug("Picked string(s) with %r: %s", which, picked)
    return picked
