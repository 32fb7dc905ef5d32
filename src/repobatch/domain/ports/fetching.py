"""Ports for fetching repository data from external providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, frozen=True)
class RepoDataUpdate:
    """Fresh repository data reported by the hosting provider."""

    full_name: str
    stars: int
    description: str | None = None
    homepage: str | None = None
    archived: bool = False
    created_at: datetime | None = None
    pushed_at: datetime | None = None


@runtime_checkable
class RepoDataFetcher(Protocol):
    async def fetch_repo_data(self, full_name: str) -> RepoDataUpdate: ...
