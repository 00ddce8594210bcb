"""Structured logging helpers for nasa-explorer.

Every record under the ``nasa_explorer`` logger is rendered as one JSON
object.  Metadata bound with :func:`log_context` appears under ``context``;
``extra=`` keys appear under ``extra``.  Values whose key looks like a
credential are replaced, and ``api_key=`` query parameters are masked in any
string that passes through the formatter.
"""

from __future__ import annotations

import contextlib
import contextvars
import datetime as _dt
import json
import logging
import os
import re
import sys
from typing import Any, Dict, Iterator, Mapping, Optional, TextIO

_LOGGER_NAME = "nasa_explorer"
_REDACTED = "***REDACTED***"
_SENSITIVE_MARKERS = ("api_key", "api-key", "apikey", "authorization", "password", "secret", "token")
_QUERY_KEY_RE = re.compile(r"(api_key=)[^&\s]+", re.IGNORECASE)

# Attributes every LogRecord carries; anything else was passed via ``extra=``.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

_bound: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("nasa_explorer_log_context", default={})


def scrub_url(text: str) -> str:
    """Mask ``api_key=...`` query parameters inside ``text``."""

    return _QUERY_KEY_RE.sub(rf"\g<1>{_REDACTED}", text)


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in _SENSITIVE_MARKERS)


def _sanitize(value: Any, sensitive: bool = False) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _sanitize(v, _is_sensitive(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize(item, sensitive) for item in value]
    if sensitive:
        return _REDACTED
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return scrub_url(value)
    return value


class JSONFormatter(logging.Formatter):
    """One JSON document per record, with bound context and extras."""

    def format(self, record: logging.LogRecord) -> str:
        created = _dt.datetime.fromtimestamp(record.created, tz=_dt.timezone.utc)
        document: Dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": scrub_url(record.getMessage()),
        }
        bound = _bound.get()
        if bound:
            document["context"] = _sanitize(bound)
        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if extra:
            document["extra"] = _sanitize(extra)
        if record.exc_info:
            document["exception"] = scrub_url(self.formatException(record.exc_info))
        return json.dumps(document, default=repr)


def _level_from(value: Optional[str | int]) -> int:
    if value is None:
        value = os.getenv("NASA_EXPLORER_LOG_LEVEL") or "INFO"
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: Optional[str | int] = None,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> logging.Logger:
    """Attach a JSON handler (stderr by default) to the package logger.

    Repeated calls are no-ops unless ``force`` is set, in which case existing
    handlers are replaced.  ``level`` falls back to ``$NASA_EXPLORER_LOG_LEVEL``.
    """

    root = logging.getLogger(_LOGGER_NAME)
    if root.handlers and not force:
        return root
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)
    root.setLevel(_level_from(level))
    root.propagate = False
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


@contextlib.contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind metadata (endpoint, NORAD id, ...) to records emitted inside the block.

    ``None`` values are ignored so optional parameters can be passed through.
    """

    merged = {**_bound.get(), **{k: v for k, v in fields.items() if v is not None}}
    token = _bound.set(merged)
    try:
        yield merged
    finally:
        _bound.reset(token)


__all__ = ["JSONFormatter", "configure_logging", "get_logger", "log_context", "scrub_url"]
