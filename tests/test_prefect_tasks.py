import logging

from gather.core.scraping import prefect_tasks


def test_scrape_task_returns_locators(monkeypatch):
    calls = []

    def fake_files_to_scrape(uri, pattern, which, fetcher):
        calls.append((uri, pattern, which, fetcher.timeout))
        return [f"{uri}/a.gz"]

    monkeypatch.setattr(prefect_tasks, "files_to_scrape", fake_files_to_scrape)
    monkeypatch.setattr(prefect_tasks, "get_run_logger", lambda: logging.getLogger("t"))

    result = prefect_tasks.scrape_task.fn("http://host", r"\w\.gz", "last", timeout=5)

    assert result == ["http://host/a.gz"]
    assert calls == [("http://host", r"\w\.gz", "last", 5)]


def test_download_file_task_returns_info(monkeypatch):
    class DummyDownloader:
        def __init__(self, fetcher, track_interval=10.0):
            self.fetcher = fetcher

        def download(self, url, path):
            return {"path": path, "url": url, "size": "3", "sha256": "abc"}

    monkeypatch.setattr(prefect_tasks, "Downloader", DummyDownloader)
    monkeypatch.setattr(prefect_tasks, "get_run_logger", lambda: logging.getLogger("t"))

    info = prefect_tasks.download_file_task.fn("http://host/a.gz", "out.gz")

    assert info["path"] == "out.gz"
    assert info["url"] == "http://host/a.gz"
