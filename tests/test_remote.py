import pytest
import requests

from ascii_image import remote
from ascii_image.errors import DecodeError
from ascii_image.remote import fetch_bytes, is_url, make_session


class FakeResponse:
    def __init__(self, status_code, content):
        self.status_code = status_code
        self.content = content


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc:
            raise self.exc
        return self.response


def use_session(monkeypatch, session):
    monkeypatch.setattr(remote, "make_session", lambda user_agent, retries=3: session)


@pytest.mark.parametrize("source,expected", [
    ("http://x/a.png", True),
    ("HTTPS://x/a.png", True),
    ("/tmp/http://odd.png", False),
    ("photo.png", False),
])
def test_is_url(source, expected):
    assert is_url(source) is expected


def test_make_session_sets_agent_and_retries():
    session = make_session("ascii-image-test", retries=2)
    assert session.headers["User-Agent"] == "ascii-image-test"
    assert session.get_adapter("https://example.invalid/").max_retries.total == 2
    assert session.get_adapter("http://example.invalid/").max_retries.total == 2


def test_fetch_ok_uses_configured_timeouts(monkeypatch):
    session = FakeSession(FakeResponse(200, b"PNGDATA"))
    use_session(monkeypatch, session)
    data = fetch_bytes("https://x/a.png", {"connect_timeout_s": 1.5, "read_timeout_s": 4.0})
    assert data == b"PNGDATA"
    assert session.calls == [("https://x/a.png", (1.5, 4.0))]


def test_fetch_http_error(monkeypatch):
    use_session(monkeypatch, FakeSession(FakeResponse(404, b"")))
    with pytest.raises(DecodeError) as exc:
        fetch_bytes("https://x/missing.png")
    assert exc.value.reason == "HTTP 404"


def test_fetch_empty_body(monkeypatch):
    use_session(monkeypatch, FakeSession(FakeResponse(200, b"")))
    with pytest.raises(DecodeError):
        fetch_bytes("https://x/empty.png")


def test_fetch_transport_error(monkeypatch):
    use_session(monkeypatch, FakeSession(exc=requests.ConnectionError("refused")))
    with pytest.raises(DecodeError) as exc:
        fetch_bytes("https://x/a.png")
    assert "refused" in exc.value.reason
