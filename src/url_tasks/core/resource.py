"""Resource identifiers and the transport kind behind each URI scheme.

`parse_resource` is the only place where a scheme string is looked at; the
rest of the package dispatches on `Transport`.
"""

from __future__ import annotations

from enum import Enum
from typing import Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict

from url_tasks.core.errors import UnsupportedSchemeError


class Transport(str, Enum):
    HTTP = "http"
    FTP = "ftp"
    FILE = "file"


_SCHEMES = {
    "http": Transport.HTTP,
    "https": Transport.HTTP,
    "ftp": Transport.FTP,
    "file": Transport.FILE,
}


class ResourceIdentifier(BaseModel):
    """Immutable URI plus the transport that can open it."""

    model_config = ConfigDict(frozen=True)

    uri: str
    scheme: str
    transport: Transport

    @property
    def local_path(self) -> str:
        """Filesystem path of a `file:` URI, percent-decoded."""
        if self.transport is not Transport.FILE:
            raise ValueError(f"{self.uri!r} is not a local file resource")
        return url2pathname(urlparse(self.uri).path)

    def __str__(self) -> str:
        return self.uri


def parse_resource(value: Union[str, ResourceIdentifier]) -> ResourceIdentifier:
    if isinstance(value, ResourceIdentifier):
        return value
    scheme = urlparse(value).scheme.lower()
    transport = _SCHEMES.get(scheme)
    if transport is None:
        raise UnsupportedSchemeError(value, scheme)
    return ResourceIdentifier(uri=value, scheme=scheme, transport=transport)
