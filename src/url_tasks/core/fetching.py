"""Sequential and bounded-concurrency download of URL bodies.

`fetch_urls` walks the URLs one by one; `fetch_urls_bounded` runs them on a
thread pool of `max_concurrent` workers. Both return bodies in input order
and share one `Fetcher` (one HTTP session) per call, closed before returning.
"""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Iterable, List, Optional, cast

from url_tasks.core.config import FetchSettings
from url_tasks.core.errors import InvalidArgumentError, UnsupportedSchemeError
from url_tasks.core.fetcher import Fetcher
from url_tasks.core.resource import Transport, parse_resource

FetcherFactory = Callable[[int], Fetcher]


def _default_factory(settings: FetchSettings) -> FetcherFactory:
    def make(pool_size: int) -> Fetcher:
        return Fetcher(
            timeout=settings.timeout, pool_size=pool_size, ua_pool=settings.ua_pool
        )

    return make


def _http_urls(urls: Iterable[str]) -> List[str]:
    """Materialize `urls`, rejecting anything that is not HTTP(S)."""
    checked = []
    for url in urls:
        resource = parse_resource(url)
        if resource.transport is not Transport.HTTP:
            raise UnsupportedSchemeError(resource.uri, resource.scheme)
        checked.append(resource.uri)
    return checked


def fetch_urls(
    urls: Iterable[str],
    settings: Optional[FetchSettings] = None,
    fetcher_factory: Optional[FetcherFactory] = None,
) -> List[str]:
    """Download each URL in turn and return the bodies in input order.

    This is the baseline for timing comparisons against `fetch_urls_bounded`.
    """
    settings = settings or FetchSettings()
    make = fetcher_factory or _default_factory(settings)
    url_list = _http_urls(urls)

    fetcher = make(1)
    try:
        return [fetcher.get_text(url) for url in url_list]
    finally:
        fetcher.close()


def fetch_urls_bounded(
    urls: Iterable[str],
    max_concurrent: int,
    settings: Optional[FetchSettings] = None,
    fetcher_factory: Optional[FetcherFactory] = None,
) -> List[str]:
    """Download all URLs with at most `max_concurrent` requests in flight.

    result[i] is always the body of urls[i], whatever order downloads finish
    in. The call blocks until every download has finished. If any download
    fails, the error of the earliest failing URL is raised and no results are
    returned. Downloads already running are left to finish; queued ones are
    cancelled.
    """
    if isinstance(max_concurrent, bool) or not isinstance(max_concurrent, int):
        raise InvalidArgumentError(
            f"max_concurrent must be an integer, got {max_concurrent!r}"
        )
    if max_concurrent < 1:
        raise InvalidArgumentError(
            f"max_concurrent must be >= 1, got {max_concurrent}"
        )

    settings = settings or FetchSettings()
    make = fetcher_factory or _default_factory(settings)
    url_list = _http_urls(urls)
    if not url_list:
        return []

    results: List[Optional[str]] = [None] * len(url_list)
    fetcher = make(max_concurrent)

    # each worker owns exactly one slot of `results`
    def worker(index: int, url: str) -> None:
        results[index] = fetcher.get_text(url)

    try:
        with ThreadPoolExecutor(
            max_workers=max_concurrent, thread_name_prefix="url-fetch"
        ) as pool:
            futures = [pool.submit(worker, i, url) for i, url in enumerate(url_list)]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for fut in pending:
                fut.cancel()
        # futures are in input order, so the lowest failing index wins ties
        for fut in futures:
            if fut.cancelled():
                continue
            exc = fut.exception()
            if exc is not None:
                raise exc
    finally:
        fetcher.close()

    return cast(List[str], results)
