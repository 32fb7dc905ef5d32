from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from repobatch.adapters.sqlalchemy.mappings import project_table
from repobatch.adapters.sqlalchemy.repositories import SqlAlchemyRepoRepository
from repobatch.domain.batch import Selection
from repobatch.domain.model import ProjectStatus
from tests.helpers.repos import make_repo, seed_repos

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_select_ids_returns_newest_first(sqlite_session: Session) -> None:
    repos = seed_repos(sqlite_session, 5)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    ids = repository.select_ids(Selection())

    assert ids == [repo.id for repo in repos]


def test_zero_limit_means_no_limit(sqlite_session: Session) -> None:
    seed_repos(sqlite_session, 12)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    assert len(repository.select_ids(Selection(limit=0))) == 12
    assert len(repository.select_ids(Selection(limit=5))) == 5


def test_skip_drops_the_most_recent_repos(sqlite_session: Session) -> None:
    repos = seed_repos(sqlite_session, 6)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    ids = repository.select_ids(Selection(limit=2, skip=3))

    assert ids == [repos[3].id, repos[4].id]


def test_name_filter_selects_one_repo_or_none(sqlite_session: Session) -> None:
    repos = seed_repos(sqlite_session, 4)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    assert repository.select_ids(Selection(name_filter="owner2/repo2")) == [repos[2].id]
    assert repository.select_ids(Selection(name_filter="nobody/nothing")) == []


def test_async_source_methods_resolve_repos_with_projects(sqlite_session: Session) -> None:
    repo = make_repo("vuejs/vue", stars=200)
    repo.add_project("Vue.js", tags=["vue", "framework"], status=ProjectStatus.PROMOTED)
    sqlite_session.add(repo)
    sqlite_session.commit()
    repository = SqlAlchemyRepoRepository(sqlite_session)

    async def scenario() -> tuple[list[str], object]:
        ids = list(await repository.list_ids(Selection()))
        return ids, await repository.get(ids[0])

    ids, loaded = asyncio.run(scenario())

    assert ids == [repo.id]
    assert loaded is repo
    assert [project.slug for project in repo.projects] == ["vue-js"]
    assert repo.projects[0].tags == ["vue", "framework"]
    assert repo.projects[0].status is ProjectStatus.PROMOTED


def test_get_returns_none_for_unknown_identifier(sqlite_session: Session) -> None:
    seed_repos(sqlite_session, 1)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    assert asyncio.run(repository.get("0" * 32)) is None


def test_get_by_full_name(sqlite_session: Session) -> None:
    repos = seed_repos(sqlite_session, 3)
    repository = SqlAlchemyRepoRepository(sqlite_session)

    assert repository.get_by_full_name("owner1/repo1") is repos[1]
    assert repository.get_by_full_name("owner9/repo9") is None


def test_tags_are_stored_as_a_json_array(sqlite_session: Session) -> None:
    repo = make_repo("facebook/react")
    repo.add_project("React", tags=["ui", "jsx"])
    repository = SqlAlchemyRepoRepository(sqlite_session)
    repository.add(repo)
    sqlite_session.commit()

    raw = sqlite_session.execute(
        select(project_table.c.tags).where(project_table.c.slug == "react")
    ).scalar_one()

    assert raw == ["ui", "jsx"]
    stored = sqlite_session.connection().exec_driver_sql("SELECT tags FROM project").scalar_one()
    assert stored == '["ui", "jsx"]'


def test_datetimes_come_back_timezone_aware(sqlite_session: Session) -> None:
    pushed_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    repo = make_repo("sveltejs/svelte", pushed_at=pushed_at)
    sqlite_session.add(repo)
    sqlite_session.commit()
    sqlite_session.expire_all()

    loaded = SqlAlchemyRepoRepository(sqlite_session).get_by_full_name("sveltejs/svelte")

    assert loaded is not None
    assert loaded.pushed_at == pushed_at
    assert loaded.pushed_at.tzinfo is not None
