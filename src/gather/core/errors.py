"""Exception hierarchy for gather.

Core code raises these; only the CLI decides what a failure means for the
process exit code. Every constructor argument is kept in `args` so the
errors survive pickling when Prefect stores a failed task's state.
"""

from __future__ import annotations

from typing import Optional


class GatherError(Exception):
    """Base class for every error gather raises on purpose."""

    exit_code = 1


class ConfigError(GatherError):
    """Bad configuration: unreadable config file, invalid job, bad pattern."""

    exit_code = 2


class PatternError(ConfigError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(pattern, reason)
        self.pattern = pattern
        self.reason = reason

    def __str__(self) -> str:
        return f"invalid pattern {self.pattern!r}: {self.reason}"


class TransportError(GatherError):
    """A fetch failed or the server answered with a non-success status."""

    def __init__(
        self, url: str, reason: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(url, reason, status_code)
        self.url = url
        self.reason = reason
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"failed to get {self.url} (status={self.status_code}): {self.reason}"
        return f"failed to get {self.url}: {self.reason}"


class ScanError(GatherError):
    """Reading the listing stream failed part way through the scan."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"failed to find matching files: {self.reason}"


class DownloadError(GatherError):
    """Copying a remote body to local disk failed."""

    def __init__(self, url: str, path: str, reason: str) -> None:
        super().__init__(url, path, reason)
        self.url = url
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"failed to download {self.url} to {self.path}: {self.reason}"
