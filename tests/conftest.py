import threading
import time

import pytest


class FakeFetcher:
    """Stands in for `Fetcher`: serves canned bodies and records concurrency.

    `delays` maps a URL to seconds slept before answering; `fail` maps a URL
    to the exception raised for it.
    """

    def __init__(self, bodies=None, delays=None, fail=None):
        self.bodies = bodies or {}
        self.delays = delays or {}
        self.fail = fail or {}
        self.pool_size = None
        self.closed = False
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def __call__(self, pool_size):
        # used as the fetcher factory
        self.pool_size = pool_size
        return self

    def get_text(self, url):
        with self._lock:
            self.calls.append(url)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(self.delays.get(url, 0.01))
            if url in self.fail:
                raise self.fail[url]
            return self.bodies.get(url, f"body of {url}")
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self):
        self.closed = True


@pytest.fixture
def fake_fetcher():
    return FakeFetcher
