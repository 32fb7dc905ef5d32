from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from repobatch.adapters.sqlalchemy.repositories import SqlAlchemyRepoRepository
from repobatch.domain.batch import (
    AggregatedReport,
    ExecutionOptions,
    Success,
    Summary,
    UnitOfWorkFailure,
)
from repobatch.domain.tasks import (
    Task,
    TaskContext,
    TaskRegistry,
    UnknownTaskError,
    default_registry,
)
from tests.helpers.repos import seed_repos
from tests.helpers.sources import make_source

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from repobatch.domain.model import Repo


async def _noop(context: TaskContext) -> AggregatedReport[object]:
    _ = context
    return AggregatedReport(payloads=(), summary=Summary(total=0, success_count=0, failure_count=0))


def test_default_registry_lists_builtin_tasks() -> None:
    registry = default_registry()

    assert registry.names() == ["build-static-api", "update-github-data"]
    assert registry.get("update-github-data").needs_github
    assert not registry.get("build-static-api").needs_github
    assert registry.get("build-static-api").needs_output
    assert not registry.get("update-github-data").needs_output


def test_duplicate_registration_is_rejected() -> None:
    registry = TaskRegistry()
    registry.register(Task(name="noop", description="Nothing", run=_noop))

    with pytest.raises(ValueError, match="already registered"):
        registry.register(Task(name="noop", description="Again", run=_noop))


def test_unknown_task_lists_known_names() -> None:
    with pytest.raises(UnknownTaskError, match="build-static-api"):
        default_registry().get("rebuild-everything")


def test_iteration_is_sorted_by_name() -> None:
    registry = TaskRegistry()
    registry.register(Task(name="zeta", description="", run=_noop))
    registry.register(Task(name="alpha", description="", run=_noop))

    assert [task.name for task in registry] == ["alpha", "zeta"]


def test_context_requires_collaborators() -> None:
    context = TaskContext(repos=make_source(0), options=ExecutionOptions())  # pyright: ignore[reportArgumentType]

    with pytest.raises(RuntimeError, match="output"):
        context.require_output()
    with pytest.raises(RuntimeError, match="GitHub"):
        context.require_github()


def test_process_repos_uses_context_options(sqlite_session: Session) -> None:
    repos = seed_repos(sqlite_session, 5)
    context = TaskContext(
        repos=SqlAlchemyRepoRepository(sqlite_session),
        options=ExecutionOptions(limit=2, skip=1),
    )

    async def work(repo: Repo, index: int) -> Success[str]:
        return Success(payload=f"{index}:{repo.full_name}")

    report = asyncio.run(context.process_repos(work))

    assert report.payloads == (f"0:{repos[1].full_name}", f"1:{repos[2].full_name}")


def test_process_repos_failures_are_labelled_by_full_name(sqlite_session: Session) -> None:
    seed_repos(sqlite_session, 2)
    context = TaskContext(
        repos=SqlAlchemyRepoRepository(sqlite_session),
        options=ExecutionOptions(fail_fast=True),
    )

    async def work(repo: Repo, index: int) -> Success[str]:
        raise RuntimeError(f"cannot process #{index}")

    with pytest.raises(UnitOfWorkFailure, match="owner0/repo0"):
        asyncio.run(context.process_repos(work))
