"""Named tasks and the context they run with."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from repobatch.domain.batch import ExecutionContext, run_batch

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from repobatch.domain.batch import (
        AggregatedReport,
        ExecutionOptions,
        Outcome,
        SummaryReducer,
    )
    from repobatch.domain.model import Repo
    from repobatch.domain.ports import BatchSource, JsonSink, RepoDataFetcher


class UnknownTaskError(LookupError):
    """Raised when a task name is not registered."""


@dataclass(slots=True)
class TaskContext:
    """Collaborators handed to a task, plus the repo iteration helper."""

    repos: BatchSource[Repo]
    options: ExecutionOptions
    output: JsonSink | None = None
    github: RepoDataFetcher | None = None
    execution: ExecutionContext = field(default_factory=ExecutionContext)

    async def process_repos[T](
        self,
        unit_of_work: Callable[[Repo, int], Awaitable[Outcome[T]]],
        *,
        options: ExecutionOptions | None = None,
        reducer: SummaryReducer[T] | None = None,
    ) -> AggregatedReport[T]:
        return await run_batch(
            self.repos,
            unit_of_work,
            options or self.options,
            context=self.execution,
            describe=_describe_repo,
            reducer=reducer,
        )

    def require_output(self) -> JsonSink:
        if self.output is None:
            raise RuntimeError("This task needs an output sink")
        return self.output

    def require_github(self) -> RepoDataFetcher:
        if self.github is None:
            raise RuntimeError("This task needs a GitHub data fetcher")
        return self.github


type TaskRunner = Callable[[TaskContext], Awaitable[AggregatedReport[Any]]]


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    description: str
    run: TaskRunner
    needs_github: bool = False
    needs_output: bool = False


class TaskRegistry:
    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def register(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise ValueError(f"Task already registered: {task.name}")
        self._tasks[task.name] = task
        return task

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            known = ", ".join(sorted(self._tasks)) or "none"
            raise UnknownTaskError(f"Unknown task {name!r} (known: {known})") from None

    def names(self) -> list[str]:
        return sorted(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks[name] for name in self.names())


def _describe_repo(repo: Repo) -> str:
    return repo.full_name
