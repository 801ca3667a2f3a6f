"""Scraping primitives: Fetcher, pattern matching, selection, Downloader.

Also exports the Prefect task wrappers used by the gather flow.
"""

from .downloader import Downloader
from .fetcher import Fetcher
from .locators import increment_path, join_locator, output_paths
from .matcher import compile_pattern, extract_matches
from .prefect_tasks import download_file_task, scrape_task
from .progress import ProgressTracker
from .scrape import files_to_scrape, scrape_matches
from .selector import SelectionPolicy, pick_which_strings, select, unique_strings

__all__ = [
    "Fetcher",
    "Downloader",
    "ProgressTracker",
    "compile_pattern",
    "extract_matches",
    "SelectionPolicy",
    "select",
    "pick_which_strings",
    "unique_strings",
    "scrape_matches",
    "files_to_scrape",
    "join_locator",
    "increment_path",
    "output_paths",
    "scrape_task",
    "download_file_task",
]
