"""GitHub API configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy, parse_cache_setting

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_TIMEOUT_SECONDS = 15.0
GITHUB_API_VERSION = "2022-11-28"
GITHUB_CACHE_TTL_SECONDS = 3600


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Holds GitHub API configuration values."""

    access_token: str
    resilience: ResilienceConfig


def get_github_config(*, resilience: ResilienceConfig | None = None) -> GitHubConfig:
    values = require_env_vars(("GITHUB_ACCESS_TOKEN",))
    token = values["GITHUB_ACCESS_TOKEN"]
    cache = parse_cache_setting(
        os.getenv("REPOBATCH_GITHUB_CACHE"),
        default="sqlite",
        ttl_seconds=optional_env_int("REPOBATCH_GITHUB_CACHE_TTL", GITHUB_CACHE_TTL_SECONDS),
    )
    return GitHubConfig(
        access_token=token,
        resilience=resilience
        or ResilienceConfig(
            name="github",
            base_url=GITHUB_API_BASE_URL,
            timeout_seconds=GITHUB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            cache=cache,
            default_headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        ),
    )
