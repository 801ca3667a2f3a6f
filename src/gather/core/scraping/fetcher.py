"""HTTP fetcher for listings and downloads.

Provides a small `Fetcher` object exposing `stream_get` and the
`open_lines` / `open_stream` context managers used by the scrape pipeline and
the downloader. Every requests failure and every non-2xx answer is turned
into a `TransportError`.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gather import __version__
from gather.core.errors import TransportError

DEFAULT_USER_AGENT = f"gather/{__version__}"


def _strip_cr(lines: Iterator[str]) -> Iterator[str]:
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


class Fetcher:
    """Small HTTP client shared by the listing fetch and the downloader.

    Usage:
        f = Fetcher(timeout=30)
        with f.open_lines(url) as lines:
            for line in lines:
                ...

    `retries` defaults to 0 and `timeout` to None: a failed fetch is final
    and a hung server blocks until it answers or drops the connection.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        retries: int = 0,
        backoff_factor: float = 0.3,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.session = requests.Session()
        retry = Retry(
            total=retries,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset(["GET"]),
            backoff_factor=backoff_factor,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.user_agent = user_agent or DEFAULT_USER_AGENT

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {"User-Agent": self.user_agent}
        if headers:
            base.update(headers)
        return base

    def stream_get(self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs):
        # Streamed GET: the body is read lazily by the caller
        return self.session.get(
            url,
            headers=self._headers(headers),
            timeout=self.timeout,
            stream=True,
            **kwargs,
        )

    @contextmanager
    def open_stream(self, url: str):
        """Open a streamed response, raising `TransportError` unless it is 2xx."""
        try:
            resp = self.stream_get(url)
        except requests.RequestException as exc:
            raise TransportError(url, str(exc)) from exc

        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            resp.close()
            raise TransportError(url, str(exc), resp.status_code) from exc

        try:
            yield resp
        finally:
            resp.close()

    @contextmanager
    def open_lines(self, url: str) -> Iterator[Iterator[str]]:
        """Open `url` and yield an iterator over the lines of its body.

        Lines end at a line feed only and lose one trailing carriage return;
        form feeds and the other breaks `str.splitlines` knows stay in the line.
        Servers that send no charset get their body decoded as UTF-8.
        """
        with self.open_stream(url) as resp:
            if resp.encoding is None:
                resp.encoding = "utf-8"
            yield _strip_cr(resp.iter_lines(decode_unicode=True, delimiter="\n"))
