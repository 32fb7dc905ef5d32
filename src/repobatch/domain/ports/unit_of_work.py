"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from repobatch.domain.ports.sources import BatchSource

if TYPE_CHECKING:
    from types import TracebackType

    from repobatch.domain.model import Repo


@runtime_checkable
class RepoStore(BatchSource["Repo"], Protocol):
    """Persistence contract for stored repositories."""

    def add(self, entity: Repo) -> None: ...

    def get_by_full_name(self, full_name: str) -> Repo | None: ...


@dataclass(slots=True)
class RepoRepositories:
    """Repositories available inside a repository unit of work."""

    repos: RepoStore


@runtime_checkable
class RepoUnitOfWork(Protocol):
    """Transaction boundary around the repository store."""

    @property
    def repositories(self) -> RepoRepositories: ...

    def __enter__(self) -> RepoUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
