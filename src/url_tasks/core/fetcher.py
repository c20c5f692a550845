"""HTTP fetcher over a single `requests.Session`.

Provides a small `Fetcher` object exposing `get_text` and `stream_get`.
No retry policy is mounted: a failed request surfaces as `TransferError`.
"""

from __future__ import annotations

import random
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from url_tasks.core.config import DEFAULT_UA_POOL
from url_tasks.core.errors import TransferError

# sentinel so that an explicit `timeout=None` (wait forever) can be told apart
_DEFAULT = object()


class Fetcher:
    """HTTP client owning one session, sized for `pool_size` parallel requests.

    Usage:
        with Fetcher(timeout=15, pool_size=4) as f:
            body = f.get_text(url)
    """

    def __init__(
        self,
        timeout: Optional[float] = 15,
        pool_size: int = 1,
        ua_pool: Optional[list[str]] = None,
    ) -> None:
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.ua_pool = ua_pool or DEFAULT_UA_POOL

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {"User-Agent": random.choice(self.ua_pool)}
        if headers:
            base.update(headers)
        return base

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs):
        try:
            return self.session.get(
                url, headers=self._headers(headers), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise TransferError(url, f"GET failed: {exc}") from exc

    def get_text(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """GET `url` and return the decoded body, failing on non-2xx status."""
        resp = self.get(url, headers)
        raise_for_status(resp, url)
        return resp.text

    def stream_get(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout=_DEFAULT
    ):
        # Streamed GET; the caller owns the response and must close it
        try:
            resp = self.session.get(
                url,
                headers=self._headers(headers),
                timeout=self.timeout if timeout is _DEFAULT else timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise TransferError(url, f"GET failed: {exc}") from exc
        try:
            raise_for_status(resp, url)
        except TransferError:
            resp.close()
            raise
        return resp

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def raise_for_status(resp, url: str) -> None:
    """Translate an HTTP error status into `TransferError`."""
    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise TransferError(
            url, f"HTTP {resp.status_code}", status_code=resp.status_code
        ) from exc
