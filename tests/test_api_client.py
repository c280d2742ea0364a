import json
import socket
from http.client import BadStatusLine, IncompleteRead
from io import BytesIO
from urllib.error import HTTPError, URLError

import pytest

from ovrstat import api_client as api_module
from ovrstat.api_client import BlizzardAPIClient
from ovrstat.errors import UpstreamUnavailableError
from ovrstat.scraper import OverwatchScraper
from tests.helpers import load_candidates, load_fixture


class _FakeResponse(BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


@pytest.fixture
def client():
    return BlizzardAPIClient(timeout_seconds=5, retry_sleep_seconds=0)


def _install(monkeypatch, responses):
    """Make urlopen return (or raise) the queued responses in order."""
    requests = []

    def fake_urlopen(req, timeout=None):
        requests.append((req, timeout))
        item = responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return _FakeResponse(item)

    monkeypatch.setattr(api_module, "urlopen", fake_urlopen)
    return requests


def _http_error(code):
    return HTTPError("https://example.test", code, "error", {}, None)


def test_search_accounts_parses_candidates(client, monkeypatch):
    requests = _install(monkeypatch, [load_fixture("search_public.json").encode("utf-8")])

    candidates = client.search_accounts("Tester#1234")

    assert len(candidates) == 2
    assert candidates[0].battle_tag == "Tester#1234"
    assert candidates[0].is_public is True
    assert candidates[0].last_updated == 1697712000
    assert candidates[1].is_public is False
    assert candidates[1].namecard == ""

    req, timeout = requests[0]
    assert req.full_url == "https://overwatch.blizzard.com/en-us/search/account-by-name/Tester%231234/"
    assert req.get_header("Accept").startswith("application/json")
    assert timeout == 5


def test_search_accounts_empty(client, monkeypatch):
    _install(monkeypatch, [b"[]"])
    assert client.search_accounts("Ghost#0001") == []


def test_search_accounts_rejects_non_list(client, monkeypatch):
    _install(monkeypatch, [json.dumps({"error": "nope"}).encode("utf-8")])
    with pytest.raises(UpstreamUnavailableError):
        client.search_accounts("Tester#1234")


def test_search_accounts_rejects_invalid_json(client, monkeypatch):
    _install(monkeypatch, [b"<html>busy</html>"])
    with pytest.raises(UpstreamUnavailableError):
        client.search_accounts("Tester#1234")


def test_fetch_document_decodes_html(client, monkeypatch):
    requests = _install(monkeypatch, ["<h1>Zoë</h1>".encode("utf-8")])
    assert client.fetch_document("https://example.test/career/Zoe-1/") == "<h1>Zoë</h1>"
    assert requests[0][0].get_header("Accept").startswith("text/html")


def test_rate_limit_retried_once(client, monkeypatch):
    requests = _install(monkeypatch, [_http_error(429), b"<html></html>"])
    assert client.fetch_document("https://example.test/") == "<html></html>"
    assert len(requests) == 2


def test_rate_limit_twice_is_upstream_unavailable(client, monkeypatch):
    _install(monkeypatch, [_http_error(429), _http_error(429)])
    with pytest.raises(UpstreamUnavailableError):
        client.fetch_document("https://example.test/")


@pytest.mark.parametrize("error", [
    _http_error(503),
    URLError("name resolution failed"),
    socket.timeout("timed out"),
])
def test_transport_errors_are_upstream_unavailable(client, monkeypatch, error):
    _install(monkeypatch, [error])
    with pytest.raises(UpstreamUnavailableError) as exc_info:
        client.fetch_document("https://example.test/")
    assert exc_info.value.__cause__ is error


def test_not_found_page_is_returned(client, monkeypatch):
    error = HTTPError("https://example.test", 404, "Not Found", {}, BytesIO(b"<h1 slot='heading'>Page Not Found</h1>"))
    _install(monkeypatch, [error])
    assert "Page Not Found" in client.fetch_document("https://example.test/career/Ghost-0001/")


def test_not_found_search_is_upstream_unavailable(client, monkeypatch):
    _install(monkeypatch, [_http_error(404)])
    with pytest.raises(UpstreamUnavailableError):
        client.search_accounts("Ghost#0001")


class _TruncatedResponse(_FakeResponse):
    def read(self, *args):
        raise IncompleteRead(b"<html>", 5000)


def test_truncated_body_is_upstream_unavailable(client, monkeypatch):
    monkeypatch.setattr(api_module, "urlopen", lambda req, timeout=None: _TruncatedResponse())
    with pytest.raises(UpstreamUnavailableError) as exc_info:
        client.fetch_document("https://example.test/career/Tester-1234/")
    assert isinstance(exc_info.value.__cause__, IncompleteRead)


def test_bad_status_line_is_upstream_unavailable(client, monkeypatch):
    _install(monkeypatch, [BadStatusLine("HTTP/9.9 ???")])
    with pytest.raises(UpstreamUnavailableError):
        client.search_accounts("Tester#1234")


def test_truncated_career_page_surfaces_through_pipeline(monkeypatch):
    api = BlizzardAPIClient(retry_sleep_seconds=0)
    monkeypatch.setattr(api, "search_accounts", lambda tag: load_candidates())
    monkeypatch.setattr(api_module, "urlopen", lambda req, timeout=None: _TruncatedResponse())

    with pytest.raises(UpstreamUnavailableError):
        OverwatchScraper(client=api).stats("Tester#1234", "pc")
