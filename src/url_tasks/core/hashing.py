"""Streaming MD5 of a resource addressed by URI.

Each transport has an opener: a context manager that yields an iterator of
byte chunks and releases its connection or file handle on exit. The digest
is computed in a single sequential pass, one chunk at a time, so the
resource is never held in memory whole.

`hash_resource` is the async entry point; the blocking read loop runs in a
worker thread so many hashes can be awaited concurrently.
"""

from __future__ import annotations

import asyncio
import ftplib
import hashlib
from contextlib import contextmanager
from typing import Callable, ContextManager, Dict, Iterable, Iterator, List, Union
from urllib.request import urlopen

import requests

from url_tasks.core.config import FetchSettings
from url_tasks.core.errors import TransferError
from url_tasks.core.fetcher import Fetcher
from url_tasks.core.resource import ResourceIdentifier, Transport, parse_resource

Opener = Callable[[ResourceIdentifier, FetchSettings], ContextManager[Iterator[bytes]]]


@contextmanager
def _open_http(identifier: ResourceIdentifier, settings: FetchSettings):
    # no timeout: large pages may take as long as they need
    with Fetcher(timeout=None, ua_pool=settings.ua_pool) as fetcher:
        resp = fetcher.stream_get(identifier.uri, timeout=None)
        with resp:
            yield _http_chunks(resp, identifier.uri, settings.chunk_size)


def _http_chunks(resp, url: str, chunk_size: int) -> Iterator[bytes]:
    try:
        for chunk in resp.iter_content(chunk_size=chunk_size):
            if chunk:
                yield chunk
    except requests.RequestException as exc:
        raise TransferError(url, f"HTTP body read failed: {exc}") from exc


@contextmanager
def _open_ftp(identifier: ResourceIdentifier, settings: FetchSettings):
    try:
        resp = urlopen(identifier.uri)
    except ftplib.all_errors as exc:
        raise TransferError(identifier.uri, f"FTP download failed: {exc}") from exc
    with resp:
        yield _ftp_chunks(resp, identifier.uri, settings.chunk_size)


def _ftp_chunks(resp, url: str, chunk_size: int) -> Iterator[bytes]:
    try:
        for chunk in iter(lambda: resp.read(chunk_size), b""):
            yield chunk
    except ftplib.all_errors as exc:
        raise TransferError(url, f"FTP read failed: {exc}") from exc


@contextmanager
def _open_file(identifier: ResourceIdentifier, settings: FetchSettings):
    # OSError from open/read is propagated as is
    with open(identifier.local_path, "rb") as fh:
        yield iter(lambda: fh.read(settings.chunk_size), b"")


_OPENERS: Dict[Transport, Opener] = {
    Transport.HTTP: _open_http,
    Transport.FTP: _open_ftp,
    Transport.FILE: _open_file,
}


def md5_hex(chunks: Iterable[bytes]) -> str:
    """Feed `chunks` into MD5 and return the 32-char lowercase hex digest."""
    hasher = hashlib.md5()
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.hexdigest()


def compute_md5(
    resource: Union[str, ResourceIdentifier],
    settings: FetchSettings | None = None,
) -> str:
    """Blocking variant of `hash_resource`."""
    settings = settings or FetchSettings()
    identifier = parse_resource(resource)
    opener = _OPENERS[identifier.transport]
    with opener(identifier, settings) as chunks:
        return md5_hex(chunks)


async def hash_resource(
    resource: Union[str, ResourceIdentifier],
    settings: FetchSettings | None = None,
) -> str:
    """Return the MD5 hex digest of an http(s), ftp or file resource.

    Raises `UnsupportedSchemeError` before any I/O for other schemes,
    `TransferError` for network/FTP failures and `OSError` for local files.
    """
    settings = settings or FetchSettings()
    # scheme is validated here, on the caller's side of the thread hop
    identifier = parse_resource(resource)
    return await asyncio.to_thread(compute_md5, identifier, settings)


async def hash_resources(
    resources: Iterable[Union[str, ResourceIdentifier]],
    settings: FetchSettings | None = None,
) -> List[str]:
    """Hash several resources concurrently; digests come back in input order."""
    return list(
        await asyncio.gather(*(hash_resource(r, settings) for r in resources))
    )
