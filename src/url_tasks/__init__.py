"""Small URL fetching and resource hashing toolkit.

Exposes the three operations used to compare sequential and concurrent I/O:
`fetch_urls`, `fetch_urls_bounded` and `hash_resource`.
"""

from url_tasks.core.errors import (
    InvalidArgumentError,
    TransferError,
    UnsupportedSchemeError,
    UrlTasksError,
)
from url_tasks.core.fetching import fetch_urls, fetch_urls_bounded
from url_tasks.core.hashing import hash_resource, hash_resources

__all__ = [
    "fetch_urls",
    "fetch_urls_bounded",
    "hash_resource",
    "hash_resources",
    "UrlTasksError",
    "InvalidArgumentError",
    "UnsupportedSchemeError",
    "TransferError",
]
