import json
from typing import Any, List

import pytest
import requests

from hookwatch.watchers.base import Article


def make_response(status: int = 200, body: Any = None, raw: bytes | None = None, url: str = "https://api.example.test/list"):
    r = requests.Response()
    r.status_code = status
    r.url = url
    r.encoding = "utf-8"
    if raw is not None:
        r._content = raw
    else:
        r._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return r


class FakeSession:
    """Stands in for requests.Session; replays queued responses or raises queued exceptions."""

    def __init__(self, responses: List[Any] | None = None):
        self.responses = list(responses or [])
        self.calls: List[tuple] = []

    def _next(self):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kw):
        self.calls.append(("GET", url, kw))
        return self._next()

    def post(self, url, **kw):
        self.calls.append(("POST", url, kw))
        return self._next()


class SyncExecutor:
    """Runs submitted work immediately so delivery side effects are observable."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        fn(*args, **kwargs)

    def shutdown(self, wait=True, cancel_futures=False):
        pass


def article(id: str, ts: int, title: str = "Title", subtitle: str | None = None, body: str = "Body") -> Article:
    return Article(id=id, timestamp=ts, title=title, subtitle=subtitle, body=body, url=f"https://news.example.test/{id}")


class ListWatcher:
    """Watcher double returning a queued listing (or raising a queued exception) per call."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def fetch_latest(self):
        self.calls += 1
        item = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(item, Exception):
            raise item
        return list(item)


class RecordingDispatcher:
    def __init__(self):
        self.scheduled: List[Article] = []

    def schedule(self, a: Article) -> None:
        self.scheduled.append(a)


@pytest.fixture
def sync_executor():
    return SyncExecutor()
