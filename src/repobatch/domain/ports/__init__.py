"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RepoDataFetcher, RepoDataUpdate
from .output import JsonSink
from .sources import BatchSource, EntitySource, IdentifierSource
from .unit_of_work import RepoRepositories, RepoStore, RepoUnitOfWork

__all__ = [
    "BatchSource",
    "EntitySource",
    "IdentifierSource",
    "JsonSink",
    "RepoDataFetcher",
    "RepoDataUpdate",
    "RepoRepositories",
    "RepoStore",
    "RepoUnitOfWork",
]
