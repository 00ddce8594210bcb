"""HTTP client wrappers for the NASA public APIs."""
from __future__ import annotations

import dataclasses
import json
import socket
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Dict, Mapping, Optional

from nasa_explorer.config import ClientSettings
from nasa_explorer.logging import get_logger

DEFAULT_USER_AGENT = "NASA-Data-Explorer/1.0 (+https://api.nasa.gov)"
DEFAULT_TIMEOUT = 30.0
BACKOFF_FACTOR = 1.5
NON_RETRYABLE_STATUSES = frozenset({400, 401, 403, 404, 500, 501, 502, 503})

_LOGGER = get_logger("fetch.sources")

_NOT_FOUND_MESSAGES = (
    ("images-api.nasa.gov", "No NASA media library items found for the specified parameters."),
    ("/earth/", "No satellite imagery available for this location and date. Try a different location or date."),
    ("eonet", "No natural events found for the specified parameters."),
    ("/neo/", "No near-Earth objects found for the specified parameters."),
    ("/mars-photos/", "No Mars rover photos found for the specified parameters."),
    ("/planetary/apod", "No Astronomy Picture of the Day found for the specified date."),
    ("/EPIC/", "No EPIC images available for the specified date or parameters."),
    ("/techtransfer/", "No tech transfer data found for the specified parameters."),
)
TIMEOUT_MESSAGE = "Request timeout. The NASA API is taking too long to respond."
CONNECTION_MESSAGE = "Cannot connect to NASA API. Please check your internet connection."
TECH_TRANSFER_OUTAGE_MESSAGE = (
    "NASA Tech Transfer API is currently experiencing issues. This is a known problem with the service. "
    "Please try again later."
)


class UpstreamError(RuntimeError):
    """Raised when an upstream API fails to deliver a usable response."""

    def __init__(self, message: str, status: Optional[int] = None, endpoint: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.endpoint = endpoint

    @property
    def retryable(self) -> bool:
        return self.status not in NON_RETRYABLE_STATUSES


def not_found_message(endpoint: str) -> str:
    lowered = endpoint.lower()
    for marker, message in _NOT_FOUND_MESSAGES:
        if marker.lower() in lowered:
            return message
    return "Requested resource not found. Please check your parameters."


def describe_status(status: int, endpoint: str, detail: Optional[str] = None) -> str:
    """User-facing message for an HTTP error ``status`` from ``endpoint``."""

    if status == 400:
        return detail or "Invalid request parameters. Please check your input."
    if status == 401:
        return "Invalid API key. Please check your NASA API key."
    if status == 403:
        return "Access forbidden. Your API key may have exceeded its quota."
    if status == 404:
        return not_found_message(endpoint)
    if status == 429:
        return "NASA API rate limit exceeded. Please try again in a few minutes."
    if status >= 500:
        if "/techtransfer/" in endpoint.lower():
            return TECH_TRANSFER_OUTAGE_MESSAGE
        return "NASA API is currently experiencing issues. Please try again later."
    return f"NASA API error ({status}): {detail or 'Unknown error'}"


def _error_detail(exc: urllib.error.HTTPError) -> Optional[str]:
    try:
        body = exc.read()
    except OSError:
        return None
    if not body:
        return None
    try:
        data = json.loads(body.decode("utf-8", errors="replace"))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    nested = data.get("error")
    if isinstance(nested, dict):
        return nested.get("message")
    return data.get("msg") or data.get("message")


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return True
    reason = getattr(exc, "reason", None)
    return isinstance(reason, (socket.timeout, TimeoutError))


@dataclasses.dataclass
class NasaClient:
    """JSON GET against one upstream base URL with retries and rate limiting.

    The ``api_key`` is appended to every query unless ``send_api_key`` is
    false (EONET and the TLE API reject unknown parameters).  Failures are
    retried with ``retry_delay * 1.5 ** (attempt - 1)`` back-off except for
    statuses in :data:`NON_RETRYABLE_STATUSES`.
    """

    name: str
    base_url: str
    api_key: Optional[str] = None
    send_api_key: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 3
    retry_delay: float = 1.0
    rate_limit_seconds: float = 0.0
    opener: Optional[Callable[[urllib.request.Request, float], bytes]] = None
    monotonic: Callable[[], float] = time.monotonic
    sleeper: Callable[[float], None] = time.sleep

    _last_request: float = dataclasses.field(default=0.0, init=False, repr=False)

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        query: Dict[str, str] = {}
        for key, value in (params or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            query[key] = str(value)
        if self.send_api_key and self.api_key:
            query["api_key"] = self.api_key
        url = self.base_url.rstrip("/")
        if path:
            url += path if path.startswith("/") else f"/{path}"
        if query:
            url += "?" + urllib.parse.urlencode(query)
        return url

    def _build_request(self, url: str) -> urllib.request.Request:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        return urllib.request.Request(url, headers=headers, method="GET")

    def _enforce_rate_limit(self) -> None:
        if self.rate_limit_seconds <= 0:
            return
        now = self.monotonic()
        elapsed = now - self._last_request
        delay = self.rate_limit_seconds - elapsed
        if delay > 0:
            self.sleeper(delay)
            now = self.monotonic()
        self._last_request = now

    def _default_opener(self, request: urllib.request.Request, timeout: float) -> bytes:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            return resp.read()

    def _attempt(self, path: str, url: str) -> Any:
        self._enforce_rate_limit()
        opener = self.opener or self._default_opener
        try:
            payload = opener(self._build_request(url), self.timeout)
        except urllib.error.HTTPError as exc:
            raise UpstreamError(
                describe_status(exc.code, url, _error_detail(exc)), status=exc.code, endpoint=path
            ) from exc
        except (urllib.error.URLError, OSError) as exc:
            message = TIMEOUT_MESSAGE if _is_timeout(exc) else CONNECTION_MESSAGE
            raise UpstreamError(message, endpoint=path) from exc
        try:
            return json.loads(payload.decode("utf-8", errors="replace"))
        except ValueError as exc:
            raise UpstreamError(f"{self.name} returned a malformed JSON payload", status=502, endpoint=path) from exc

    def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``path`` with ``params`` and return the decoded JSON body."""

        url = self.build_url(path, params)
        attempts = max(1, self.retries)
        attempt = 1
        while True:
            try:
                return self._attempt(path, url)
            except UpstreamError as exc:
                _LOGGER.warning(
                    "Upstream attempt failed",
                    extra={"source": self.name, "attempt": attempt, "status": exc.status, "url": url},
                )
                if not exc.retryable or attempt >= attempts:
                    raise
            self.sleeper(self.retry_delay * BACKOFF_FACTOR ** (attempt - 1))
            attempt += 1


@dataclasses.dataclass
class UpstreamDefinition:
    name: str
    base_url: str
    send_api_key: bool = True
    rate_limit_seconds: float = 0.0


UPSTREAMS: Dict[str, UpstreamDefinition] = {
    "nasa": UpstreamDefinition(name="nasa", base_url="https://api.nasa.gov"),
    "eonet": UpstreamDefinition(
        name="eonet",
        base_url="https://eonet.gsfc.nasa.gov/api/v3",
        send_api_key=False,
    ),
    "tle": UpstreamDefinition(
        name="tle",
        base_url="https://tle.ivanstanojevic.me/api/tle",
        send_api_key=False,
        rate_limit_seconds=0.5,
    ),
    "data": UpstreamDefinition(
        name="data",
        base_url="https://data.nasa.gov/resource",
        send_api_key=False,
    ),
    "images": UpstreamDefinition(
        name="images",
        base_url="https://images-api.nasa.gov",
        send_api_key=False,
    ),
}


def build_client(
    name: str,
    settings: Optional[ClientSettings] = None,
    opener: Optional[Callable[[urllib.request.Request, float], bytes]] = None,
    sleeper: Callable[[float], None] = time.sleep,
) -> NasaClient:
    """Instantiate the :class:`NasaClient` registered under ``name``.

    The ``nasa`` upstream honours ``settings.base_url`` so a proxy or mock
    server can be substituted through configuration.
    """

    definition = UPSTREAMS.get(name)
    if definition is None:
        raise KeyError(f"unknown upstream {name!r}; choose from {sorted(UPSTREAMS)}")
    settings = settings or ClientSettings()
    base_url = settings.base_url if name == "nasa" else definition.base_url
    return NasaClient(
        name=definition.name,
        base_url=base_url,
        api_key=settings.api_key,
        send_api_key=definition.send_api_key,
        timeout=settings.timeout,
        retries=settings.retries,
        retry_delay=settings.retry_delay,
        rate_limit_seconds=definition.rate_limit_seconds,
        opener=opener,
        sleeper=sleeper,
    )


__all__ = [
    "BACKOFF_FACTOR",
    "CONNECTION_MESSAGE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "NON_RETRYABLE_STATUSES",
    "NasaClient",
    "TECH_TRANSFER_OUTAGE_MESSAGE",
    "TIMEOUT_MESSAGE",
    "UPSTREAMS",
    "UpstreamDefinition",
    "UpstreamError",
    "build_client",
    "describe_status",
    "not_found_message",
]
