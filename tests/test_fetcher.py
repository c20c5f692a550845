import pytest
import requests

from url_tasks.core.errors import TransferError
from url_tasks.core.fetcher import Fetcher


class DummyResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def close(self):
        self.closed = True


def test_get_text_returns_body_and_sends_user_agent(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None, **kwargs):
        seen.update(url=url, headers=headers, timeout=timeout)
        return DummyResponse("<html>ok</html>")

    f = Fetcher(timeout=7, ua_pool=["TestAgent/1.0"])
    monkeypatch.setattr(f.session, "get", fake_get)

    assert f.get_text("https://example.org/") == "<html>ok</html>"
    assert seen["headers"]["User-Agent"] == "TestAgent/1.0"
    assert seen["timeout"] == 7


def test_get_text_non_success_status_raises_transfer_error(monkeypatch):
    f = Fetcher()
    monkeypatch.setattr(
        f.session, "get", lambda url, **kw: DummyResponse("missing", status_code=404)
    )

    with pytest.raises(TransferError) as excinfo:
        f.get_text("https://example.org/missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://example.org/missing"
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_connection_error_becomes_transfer_error(monkeypatch):
    def boom(url, **kw):
        raise requests.ConnectionError("connection refused")

    f = Fetcher()
    monkeypatch.setattr(f.session, "get", boom)

    with pytest.raises(TransferError) as excinfo:
        f.get_text("https://unreachable.test/")
    assert excinfo.value.status_code is None


def test_stream_get_passes_explicit_none_timeout(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout="unset", stream=False, **kwargs):
        seen.update(timeout=timeout, stream=stream)
        return DummyResponse()

    f = Fetcher(timeout=15)
    monkeypatch.setattr(f.session, "get", fake_get)
    f.stream_get("https://example.org/big", timeout=None)

    assert seen == {"timeout": None, "stream": True}


def test_stream_get_closes_response_on_error_status(monkeypatch):
    resp = DummyResponse(status_code=503)
    f = Fetcher()
    monkeypatch.setattr(f.session, "get", lambda url, **kw: resp)

    with pytest.raises(TransferError):
        f.stream_get("https://example.org/down")
    assert resp.closed is True


def test_context_manager_closes_session(monkeypatch):
    closed = []
    with Fetcher() as f:
        monkeypatch.setattr(f.session, "close", lambda: closed.append(True))
    assert closed == [True]
