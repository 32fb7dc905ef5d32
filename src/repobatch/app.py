"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

from repobatch.adapters.github import GitHubClient
from repobatch.adapters.json_output import JsonFileWriter
from repobatch.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyRepoUnitOfWork,
    is_started,
    startup,
)
from repobatch.config import get_github_config, get_storage_config
from repobatch.domain.batch import ExecutionContext, ExecutionOptions
from repobatch.domain.ports.unit_of_work import RepoUnitOfWork
from repobatch.domain.tasks import TaskContext, TaskRegistry, default_registry

if TYPE_CHECKING:
    from repobatch.domain.batch import AggregatedReport
    from repobatch.domain.ports import JsonSink, RepoDataFetcher
    from repobatch.domain.tasks import Task

UnitOfWorkFactory = Callable[[], RepoUnitOfWork]


log = getLogger(__name__)


def list_tasks(registry: TaskRegistry | None = None) -> list[Task]:
    return list(registry or default_registry())


def run_task(
    name: str,
    options: ExecutionOptions | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    output: JsonSink | None = None,
    github: RepoDataFetcher | None = None,
    registry: TaskRegistry | None = None,
    execution: ExecutionContext | None = None,
) -> AggregatedReport[Any]:
    """Run a registered task over the stored repositories and commit its changes."""

    task = (registry or default_registry()).get(name)
    effective_options = options or ExecutionOptions()
    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyRepoUnitOfWork
    if output is None and task.needs_output:
        output = JsonFileWriter(get_storage_config().static_api_dir())

    log.info(
        "Starting task %s: limit=%s, skip=%s, name=%s, concurrency=%s, throttle=%sms",
        task.name,
        effective_options.limit,
        effective_options.skip,
        effective_options.name_filter,
        effective_options.concurrency,
        effective_options.throttle_interval_ms,
    )

    with effective_uow() as uow:
        context = TaskContext(
            repos=uow.repositories.repos,
            options=effective_options,
            output=output,
            github=github,
            execution=execution or ExecutionContext(),
        )
        report = asyncio.run(_execute(task, context))
        uow.commit()

    summary = report.summary
    log.info(
        f"Finished task {task.name}: total={summary.total}, success={summary.success_count}, "
        f"failure={summary.failure_count}, flags={dict(summary.flag_counts)}"
    )
    return report


async def _execute(task: Task, context: TaskContext) -> AggregatedReport[Any]:
    if task.needs_github and context.github is None:
        async with GitHubClient(config=get_github_config()) as client:
            context.github = client
            return await task.run(context)
    return await task.run(context)
