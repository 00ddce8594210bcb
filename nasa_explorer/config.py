"""Environment driven configuration for nasa-explorer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = [
    "DEFAULT_API_KEY",
    "DEFAULT_BASE_URL",
    "AppConfig",
    "ClientSettings",
    "CacheSettings",
    "load_config",
    "redact_secret",
]

DEFAULT_API_KEY = "DEMO_KEY"
DEFAULT_BASE_URL = "https://api.nasa.gov"


@dataclass(frozen=True)
class ClientSettings:
    """Options for talking to the NASA upstream APIs."""

    api_key: str = DEFAULT_API_KEY
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    retries: int = 3
    retry_delay: float = 1.0

    @property
    def uses_demo_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY


@dataclass(frozen=True)
class CacheSettings:
    ttl: float = 3600.0
    max_size: int = 100


@dataclass(frozen=True)
class AppConfig:
    """Container for derived application configuration."""

    client: ClientSettings
    cache: CacheSettings
    log_level: Optional[str] = None

    def redact(self, value: Optional[str], keep: int = 4) -> str:
        return redact_secret(value, keep=keep)

    def describe(self) -> dict:
        """Loggable summary with the API key masked."""

        return {
            "api_key": self.redact(self.client.api_key),
            "base_url": self.client.base_url,
            "timeout": self.client.timeout,
            "retries": self.client.retries,
            "cache_ttl": self.cache.ttl,
            "cache_size": self.cache.max_size,
        }


def redact_secret(value: Optional[str], keep: int = 4) -> str:
    """Redact a secret value for safe logging."""

    if not value:
        return "<redacted>"
    keep = max(0, keep)
    if len(value) <= keep:
        return "*" * len(value)
    return f"{value[:keep]}{'*' * 4}"


def _number(env_map: Mapping[str, str], key: str, default: float, cast=float):
    raw = env_map.get(key)
    if raw is None or not raw.strip():
        return cast(default)
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be numeric, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from environment variables."""

    env_map: Mapping[str, str]
    if env is None:
        env_map = os.environ
    else:
        env_map = env

    api_key = (env_map.get("NASA_API_KEY") or "").strip() or DEFAULT_API_KEY
    base_url = (env_map.get("NASA_EXPLORER_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")

    client = ClientSettings(
        api_key=api_key,
        base_url=base_url,
        timeout=_number(env_map, "NASA_EXPLORER_TIMEOUT", 30.0),
        retries=max(1, _number(env_map, "NASA_EXPLORER_RETRIES", 3, int)),
        retry_delay=_number(env_map, "NASA_EXPLORER_RETRY_DELAY", 1.0),
    )
    cache = CacheSettings(
        ttl=_number(env_map, "NASA_EXPLORER_CACHE_TTL", 3600.0),
        max_size=_number(env_map, "NASA_EXPLORER_CACHE_SIZE", 100, int),
    )

    return AppConfig(client=client, cache=cache, log_level=env_map.get("NASA_EXPLORER_LOG_LEVEL"))
