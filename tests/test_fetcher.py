import pytest
import requests

from gather.core.errors import TransportError
from gather.core.scraping.fetcher import Fetcher


class DummyResponse:
    def __init__(self, lines=(), status_code=200, encoding=None):
        self.lines = list(lines)
        self.status_code = status_code
        self.encoding = encoding
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_lines(self, decode_unicode=False, delimiter=None):
        self.delimiter = delimiter
        return iter(self.lines)

    def close(self):
        self.closed = True


def test_open_lines_yields_body_lines(monkeypatch):
    resp = DummyResponse(["a", "b"])
    f = Fetcher()
    monkeypatch.setattr(f.session, "get", lambda url, **kwargs: resp)

    with f.open_lines("http://host/list") as lines:
        assert list(lines) == ["a", "b"]

    assert resp.encoding == "utf-8"
    assert resp.closed


def test_open_lines_splits_on_line_feed_only(monkeypatch):
    resp = DummyResponse(["a.gz\r", "name\x0cpart.gz", "c\r\r"])
    f = Fetcher()
    monkeypatch.setattr(f.session, "get", lambda url, **kwargs: resp)

    with f.open_lines("http://host/list") as lines:
        assert list(lines) == ["a.gz", "name\x0cpart.gz", "c\r"]

    assert resp.delimiter == "\n"


def test_open_lines_keeps_server_encoding(monkeypatch):
    resp = DummyResponse(["a"], encoding="latin-1")
    f = Fetcher()
    monkeypatch.setattr(f.session, "get", lambda url, **kwargs: resp)

    with f.open_lines("http://host/list"):
        pass

    assert resp.encoding == "latin-1"


def test_error_status_raises_transport_error(monkeypatch):
    resp = DummyResponse(status_code=503)
    f = Fetcher()
    monkeypatch.setattr(f.session, "get", lambda url, **kwargs: resp)

    with pytest.raises(TransportError) as excinfo:
        with f.open_lines("http://host/list"):
            pass

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == "http://host/list"
    assert resp.closed


def test_connection_failure_raises_transport_error(monkeypatch):
    def refuse(url, **kwargs):
        raise requests.ConnectionError("connection refused")

    f = Fetcher()
    monkeypatch.setattr(f.session, "get", refuse)

    with pytest.raises(TransportError, match="connection refused") as excinfo:
        with f.open_stream("http://host/file"):
            pass

    assert excinfo.value.status_code is None


def test_requests_use_timeout_and_user_agent(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None, stream=False, **kwargs):
        seen.update(headers=headers, timeout=timeout, stream=stream)
        return DummyResponse()

    f = Fetcher(timeout=12, user_agent="test-agent")
    monkeypatch.setattr(f.session, "get", fake_get)

    with f.open_stream("http://host/file"):
        pass

    assert seen == {"headers": {"User-Agent": "test-agent"}, "timeout": 12, "stream": True}
