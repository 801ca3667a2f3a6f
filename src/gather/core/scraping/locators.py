"""Locator and output path helpers.

Selected names are joined onto the listing URI to form download locators;
output paths get a numeric suffix when one command downloads several files.
"""

from __future__ import annotations

import posixpath
from typing import List


def join_locator(base: str, name: str) -> str:
    """Join a scraped `name` onto `base` with exactly one slash between."""
    return f"{base.rstrip('/')}/{name}"


def increment_path(path: str, i: int) -> str:
    """Add `_<i>` to the file name in `path`.

    The suffix goes before the last extension of the name:

    - `data/out`        -> `data/out_0`
    - `data/out.txt`    -> `data/out_0.txt`
    - `data/out.tar.gz` -> `data/out.tar_0.gz`
    - `data/.bashrc`    -> `data/_0.bashrc`
    """
    directory, filename = posixpath.split(path)
    suffix = str(i)

    if "." not in filename:
        filename = f"{filename}_{suffix}"
    else:
        pieces = filename.split(".")
        pieces[-2] = f"{pieces[-2]}_{suffix}"
        filename = ".".join(pieces)

    return posixpath.join(directory, filename)


def output_paths(save_as: str, count: int) -> List[str]:
    """Return one output path per download.

    A single download keeps `save_as` untouched; several downloads get
    `increment_path(save_as, i)` for i in 0..count-1.
    """
    if count <= 1:
        return [save_as][:count]
    return [increment_path(save_as, i) for i in range(count)]
