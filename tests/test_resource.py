import os

import pytest

from url_tasks.core.errors import UnsupportedSchemeError
from url_tasks.core.resource import ResourceIdentifier, Transport, parse_resource


@pytest.mark.parametrize(
    "uri, transport",
    [
        ("http://example.org/a", Transport.HTTP),
        ("https://example.org/a", Transport.HTTP),
        ("HTTP://EXAMPLE.ORG/", Transport.HTTP),
        ("ftp://ftp.example.org/pub/file.bin", Transport.FTP),
        ("file:///tmp/data.bin", Transport.FILE),
    ],
)
def test_parse_resource_maps_scheme_to_transport(uri, transport):
    r = parse_resource(uri)
    assert r.transport is transport
    assert r.uri == uri
    assert str(r) == uri


@pytest.mark.parametrize(
    "uri", ["mailto:someone@example.org", "/tmp/data.bin", "gopher://x/", ""]
)
def test_parse_resource_rejects_unsupported_schemes(uri):
    with pytest.raises(UnsupportedSchemeError) as excinfo:
        parse_resource(uri)
    assert excinfo.value.uri == uri


def test_parse_resource_passes_identifiers_through():
    r = parse_resource("https://example.org/")
    assert parse_resource(r) is r


def test_identifier_is_immutable():
    r = parse_resource("https://example.org/")
    with pytest.raises(Exception):
        r.uri = "https://other.org/"


def test_local_path_is_decoded(tmp_path):
    target = tmp_path / "with space.txt"
    r = parse_resource(target.as_uri())
    assert os.path.samefile(os.path.dirname(r.local_path), str(tmp_path))
    assert r.local_path.endswith("with space.txt")


def test_local_path_only_for_file_resources():
    r = ResourceIdentifier(uri="ftp://x/y", scheme="ftp", transport=Transport.FTP)
    with pytest.raises(ValueError):
        r.local_path


def test_local_path_decodes_percent_escapes_once(tmp_path):
    target = tmp_path / "a%41.txt"
    r = parse_resource(target.as_uri())
    assert "a%2541.txt" in r.uri
    assert r.local_path == str(target)
