"""GitHub REST API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from repobatch.adapters.http_resilience import ResilientClient

from .schema import GitHubRepository
from .translator import translate_repository

if TYPE_CHECKING:
    from collections.abc import Callable

    from repobatch.config.github import GitHubConfig
    from repobatch.config.http_resilience import ResilienceConfig
    from repobatch.domain.ports.fetching import RepoDataUpdate

log = getLogger(__name__)


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Async client for the repository endpoints of the GitHub API.

    One underlying HTTP client (and therefore one rate limiter) is shared by all
    calls made through an instance; use it as an async context manager.
    """

    def __init__(
        self,
        *,
        config: GitHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> GitHubClient:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_repository(self, full_name: str) -> GitHubRepository:
        if self._resilience.base_url is None:
            raise GitHubAPIError("Missing GitHub base_url in resilience configuration")
        client = self._client
        if client is None:
            raise GitHubAPIError("GitHub client used outside of its context manager")

        response = await client.get(f"/repos/{full_name}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise GitHubAPIError(
                f"GitHub repository not found: {full_name}",
                status_code=response.status_code,
            )
        if response.is_error:
            raise GitHubAPIError(
                f"GitHub API error {response.status_code} for {full_name}",
                status_code=response.status_code,
            )

        payload = response.json()
        if not isinstance(payload, dict):
            raise GitHubAPIError("Unexpected GitHub response payload")
        try:
            return GitHubRepository.model_validate(payload)
        except ValidationError as exc:
            raise GitHubAPIError(f"Invalid GitHub payload for {full_name}: {exc}") from exc

    async def fetch_repo_data(self, full_name: str) -> RepoDataUpdate:
        payload = await self.fetch_repository(full_name)
        log.debug("Fetched GitHub data for %s (stars=%s)", full_name, payload.stars)
        return translate_repository(payload)
