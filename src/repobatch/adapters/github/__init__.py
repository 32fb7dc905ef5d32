"""GitHub repository data adapter."""

from __future__ import annotations

from .client import GitHubAPIError, GitHubClient
from .schema import GitHubRepository
from .translator import translate_repository

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "GitHubRepository",
    "translate_repository",
]
