"""Exception hierarchy for url_tasks."""

from __future__ import annotations

from typing import Optional


class UrlTasksError(Exception):
    """Base exception for every error raised by this package."""


class InvalidArgumentError(UrlTasksError, ValueError):
    """An argument is outside its accepted range (e.g. concurrency bound < 1)."""


class UnsupportedSchemeError(UrlTasksError, ValueError):
    """The resource URI uses a scheme with no transport behind it."""

    def __init__(self, uri: str, scheme: str):
        self.uri = uri
        self.scheme = scheme
        super().__init__(f"Unsupported scheme {scheme!r} for resource {uri!r}")


class TransferError(UrlTasksError):
    """Network or FTP transfer failed, or the server answered with an error."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")
