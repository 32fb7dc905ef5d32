"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, cast

import httpx

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

type CacheBackend = Literal["sqlite", "memory"]

CACHE_BACKENDS: frozenset[str] = frozenset({"sqlite", "memory"})
CACHE_DISABLED = "off"


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET", "HEAD"}))
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """hishel storage for cached responses; ``None`` in place of a config disables caching."""

    backend: CacheBackend = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None


def parse_cache_setting(
    value: str | None,
    *,
    default: CacheBackend,
    ttl_seconds: float | None = None,
) -> CacheConfig | None:
    """Turn a cache setting (``sqlite``, ``memory`` or ``off``) into a cache config."""

    setting = (value or "").strip().lower() or default
    if setting == CACHE_DISABLED:
        return None
    if setting not in CACHE_BACKENDS:
        choices = ", ".join([*sorted(CACHE_BACKENDS), CACHE_DISABLED])
        raise ConfigurationError(f"Unknown cache setting {value!r} (expected one of: {choices})")
    return CacheConfig(
        backend=cast("CacheBackend", setting),
        default_ttl_seconds=ttl_seconds,
    )
