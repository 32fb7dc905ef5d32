"""Shared fixtures for GitHub adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from repobatch.config import GitHubConfig, ResilienceConfig, RetryPolicy

GitHubPayload = dict[str, object]
FIXTURES = Path(__file__).resolve().parents[2] / "data" / "github"


def load_fixture(name: str) -> GitHubPayload:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def repository_payload() -> GitHubPayload:
    return load_fixture("repository.json")


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(
        access_token="test-token",  # noqa: S106
        resilience=ResilienceConfig(
            name="github-test",
            base_url="https://api.github.test",
            retry=RetryPolicy(total=0),
            cache=None,
            default_headers={"Authorization": "Bearer test-token"},
        ),
    )
