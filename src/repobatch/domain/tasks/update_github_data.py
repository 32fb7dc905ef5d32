"""Refresh stored repositories with data from GitHub."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from repobatch.domain.batch import Success

from .registry import Task

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from repobatch.domain.batch import AggregatedReport, Outcome
    from repobatch.domain.model import Repo
    from repobatch.domain.ports import RepoDataFetcher, RepoDataUpdate

    from .registry import TaskContext

type RepoChange = dict[str, Any]


def apply_repo_update(repo: Repo, update: RepoDataUpdate, *, now: datetime) -> RepoChange:
    """Copy provider data onto ``repo`` and describe what changed."""

    previous_stars = repo.stars or 0
    repo.stars = update.stars
    repo.description = update.description
    repo.homepage = update.homepage
    repo.archived = update.archived
    if update.created_at is not None:
        repo.created_at = update.created_at
    if update.pushed_at is not None:
        repo.pushed_at = update.pushed_at
    repo.updated_at = now
    return {
        "full_name": repo.full_name,
        "stars": update.stars,
        "stars_delta": update.stars - previous_stars,
        "renamed_to": update.full_name if update.full_name != repo.full_name else None,
    }


def make_unit_of_work(
    fetcher: RepoDataFetcher,
) -> Callable[[Repo, int], Awaitable[Outcome[RepoChange]]]:
    async def refresh_repo(repo: Repo, index: int) -> Outcome[RepoChange]:
        _ = index
        update = await fetcher.fetch_repo_data(repo.full_name)
        change = apply_repo_update(repo, update, now=datetime.now(UTC))
        return Success(
            payload=change,
            meta={
                "updated": True,
                "stars_delta": change["stars_delta"],
                "archived": update.archived,
            },
        )

    return refresh_repo


def count_renamed(outcomes: Sequence[Outcome[RepoChange]]) -> dict[str, int]:
    renamed = sum(
        1
        for outcome in outcomes
        if isinstance(outcome, Success) and outcome.payload.get("renamed_to")
    )
    return {"renamed": renamed}


async def run(context: TaskContext) -> AggregatedReport[RepoChange]:
    fetcher = context.require_github()
    return await context.process_repos(make_unit_of_work(fetcher), reducer=count_renamed)


update_github_data_task = Task(
    name="update-github-data",
    description="Refresh stars, description and activity dates of every repo from GitHub.",
    run=run,
    needs_github=True,
)
