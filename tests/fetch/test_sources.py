import io
import socket
import urllib.error

import pytest

from fetch.sources import (
    CONNECTION_MESSAGE,
    TIMEOUT_MESSAGE,
    NasaClient,
    UpstreamError,
    build_client,
    describe_status,
)
from nasa_explorer.config import ClientSettings


def _http_error(url: str, code: int, body: bytes = b"") -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, code, "error", hdrs=None, fp=io.BytesIO(body))


class ScriptedOpener:
    """Replays a list of responses (bytes) or exceptions."""

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests = []

    def __call__(self, request, timeout):
        self.requests.append(request)
        step = self.steps.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step


def _client(opener, **kwargs) -> tuple:
    delays = []
    client = NasaClient(
        name="nasa",
        base_url="https://api.nasa.gov",
        api_key="SECRETKEY",
        opener=opener,
        sleeper=delays.append,
        **kwargs,
    )
    return client, delays


def test_build_url_appends_api_key_and_skips_none():
    client, _ = _client(None)
    url = client.build_url("/planetary/apod", {"hd": True, "date": None})
    assert url == "https://api.nasa.gov/planetary/apod?hd=true&api_key=SECRETKEY"


def test_build_url_without_api_key():
    client = NasaClient(name="eonet", base_url="https://eonet.gsfc.nasa.gov/api/v3/", send_api_key=False, api_key="X")
    assert client.build_url("events", {"limit": 5}) == "https://eonet.gsfc.nasa.gov/api/v3/events?limit=5"


def test_get_json_decodes_payload_and_sets_headers():
    opener = ScriptedOpener(b'{"title": "Pillars"}')
    client, delays = _client(opener)
    assert client.get_json("/planetary/apod") == {"title": "Pillars"}
    assert delays == []
    request = opener.requests[0]
    assert request.get_header("User-agent").startswith("NASA-Data-Explorer")
    assert "api_key=SECRETKEY" in request.full_url


def test_retryable_failures_back_off_geometrically():
    url = "https://api.nasa.gov/neo/rest/v1/feed"
    opener = ScriptedOpener(_http_error(url, 429), _http_error(url, 504), b"[]")
    client, delays = _client(opener, retry_delay=1.0)
    assert client.get_json("/neo/rest/v1/feed") == []
    assert delays == [1.0, 1.5]
    assert len(opener.requests) == 3


def test_retries_are_exhausted():
    url = "https://api.nasa.gov/neo/rest/v1/feed"
    opener = ScriptedOpener(_http_error(url, 429), _http_error(url, 429), _http_error(url, 429))
    client, delays = _client(opener, retry_delay=2.0)
    with pytest.raises(UpstreamError) as excinfo:
        client.get_json("/neo/rest/v1/feed")
    assert excinfo.value.status == 429
    assert "rate limit" in str(excinfo.value)
    assert delays == [2.0, 3.0]


@pytest.mark.parametrize("status", [400, 401, 403, 404, 500, 501, 502, 503])
def test_non_retryable_statuses_fail_fast(status):
    url = "https://api.nasa.gov/planetary/apod"
    opener = ScriptedOpener(_http_error(url, status))
    client, delays = _client(opener)
    with pytest.raises(UpstreamError) as excinfo:
        client.get_json("/planetary/apod")
    assert excinfo.value.status == status
    assert len(opener.requests) == 1
    assert delays == []


def test_not_found_message_depends_on_endpoint():
    url = "https://api.nasa.gov/planetary/apod"
    client, _ = _client(ScriptedOpener(_http_error(url, 404)))
    with pytest.raises(UpstreamError, match="No Astronomy Picture of the Day"):
        client.get_json("/planetary/apod")

    client, _ = _client(ScriptedOpener(_http_error(url, 404)))
    with pytest.raises(UpstreamError, match="No Mars rover photos"):
        client.get_json("/mars-photos/api/v1/rovers/curiosity/photos")


def test_bad_request_uses_upstream_message():
    url = "https://api.nasa.gov/planetary/apod"
    opener = ScriptedOpener(_http_error(url, 400, b'{"code": 400, "msg": "Date must be between Jun 16, 1995 and today"}'))
    client, _ = _client(opener)
    with pytest.raises(UpstreamError, match="Date must be between"):
        client.get_json("/planetary/apod")


def test_timeout_and_connection_errors_are_retried():
    opener = ScriptedOpener(
        urllib.error.URLError(socket.timeout("timed out")),
        urllib.error.URLError(ConnectionRefusedError("refused")),
        urllib.error.URLError(socket.timeout("timed out")),
    )
    client, delays = _client(opener)
    with pytest.raises(UpstreamError) as excinfo:
        client.get_json("/planetary/apod")
    assert str(excinfo.value) == TIMEOUT_MESSAGE
    assert excinfo.value.status is None
    assert len(delays) == 2


def test_connection_refused_message():
    opener = ScriptedOpener(urllib.error.URLError(ConnectionRefusedError("refused")))
    client, _ = _client(opener, retries=1)
    with pytest.raises(UpstreamError, match="Cannot connect"):
        client.get_json("/planetary/apod")
    assert CONNECTION_MESSAGE.startswith("Cannot connect")


def test_malformed_json_is_not_retried():
    opener = ScriptedOpener(b"<html>maintenance</html>")
    client, delays = _client(opener)
    with pytest.raises(UpstreamError, match="malformed JSON"):
        client.get_json("/planetary/apod")
    assert delays == []


def test_rate_limit_sleeps_between_requests():
    ticks = iter([100.0, 100.2, 100.5, 101.0])
    opener = ScriptedOpener(b"{}", b"{}")
    client, delays = _client(opener, rate_limit_seconds=0.5)
    client.monotonic = lambda: next(ticks)
    client.get_json("/a")
    client.get_json("/b")
    assert delays == [pytest.approx(0.3)]


@pytest.mark.parametrize(
    "status, fragment",
    [
        (401, "Invalid API key"),
        (403, "exceeded its quota"),
        (429, "rate limit exceeded"),
        (500, "experiencing issues"),
        (504, "experiencing issues"),
        (418, "NASA API error (418)"),
    ],
)
def test_describe_status(status, fragment):
    assert fragment in describe_status(status, "https://api.nasa.gov/x")


def test_build_client_uses_settings():
    settings = ClientSettings(api_key="KEY", base_url="http://localhost:9000", timeout=5.0, retries=1)
    nasa = build_client("nasa", settings)
    assert nasa.base_url == "http://localhost:9000"
    assert nasa.timeout == 5.0
    assert nasa.retries == 1

    eonet = build_client("eonet", settings)
    assert eonet.send_api_key is False
    assert "api_key" not in eonet.build_url("/events")

    with pytest.raises(KeyError):
        build_client("spacetrack", settings)


def test_single_attempt_raises_without_sleeping():
    url = "https://api.nasa.gov/neo/rest/v1/feed"
    opener = ScriptedOpener(_http_error(url, 429))
    client, delays = _client(opener, retries=1)
    with pytest.raises(UpstreamError) as excinfo:
        client.get_json("/neo/rest/v1/feed")
    assert excinfo.value.status == 429
    assert delays == []


def test_last_failure_is_the_one_raised():
    url = "https://api.nasa.gov/neo/rest/v1/feed"
    opener = ScriptedOpener(_http_error(url, 429), _http_error(url, 504))
    client, delays = _client(opener, retries=2)
    with pytest.raises(UpstreamError) as excinfo:
        client.get_json("/neo/rest/v1/feed")
    assert excinfo.value.status == 504
    assert delays == [1.0]


def test_tech_transfer_and_media_library_messages():
    assert "Tech Transfer API" in describe_status(500, "https://api.nasa.gov/techtransfer/patent/?patent=x")
    assert "media library" in describe_status(404, "https://images-api.nasa.gov/asset/missing")


def test_images_upstream_is_keyless():
    client = build_client("images", ClientSettings(api_key="KEY"))
    assert client.build_url("/search", {"q": "apollo"}) == "https://images-api.nasa.gov/search?q=apollo"
