from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

import pytest

from repobatch import app as app_module
from repobatch.domain.batch import ExecutionOptions
from repobatch.domain.ports import RepoDataUpdate
from repobatch.domain.tasks import UnknownTaskError
from tests.helpers.repos import make_repo

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from repobatch.adapters.sqlalchemy.unit_of_work import SqlAlchemyRepoUnitOfWork

    UnitOfWorkFactory = Callable[[], SqlAlchemyRepoUnitOfWork]


class RecordingSink:
    def __init__(self) -> None:
        self.saved: dict[str, dict[str, Any]] = {}

    def save(self, payload: Mapping[str, object], filename: str) -> Path:
        self.saved[filename] = dict(payload)
        return Path(filename)


class StaticFetcher:
    def __init__(self, stars: int) -> None:
        self.stars = stars
        self.entered = False

    async def __aenter__(self) -> Self:
        self.entered = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.entered = False

    async def fetch_repo_data(self, full_name: str) -> RepoDataUpdate:
        return RepoDataUpdate(full_name=full_name, stars=self.stars)


def _seed(factory: UnitOfWorkFactory, *full_names: str) -> None:
    with factory() as uow:
        for age, full_name in enumerate(full_names):
            repo = make_repo(full_name, age_days=age)
            repo.add_project(full_name.split("/")[1].title())
            uow.repositories.repos.add(repo)
        uow.commit()


def test_run_task_builds_static_api(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work, "vuejs/vue", "facebook/react")
    sink = RecordingSink()

    report = app_module.run_task(
        "build-static-api",
        ExecutionOptions(limit=1),
        unit_of_work_factory=sqlite_unit_of_work,
        output=sink,
    )

    assert report.summary.total == 1
    assert sink.saved["projects-full.json"]["count"] == 1
    assert sink.saved["projects-full.json"]["projects"][0]["full_name"] == "vuejs/vue"


def test_run_task_commits_github_updates(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work, "vuejs/vue")

    report = app_module.run_task(
        "update-github-data",
        unit_of_work_factory=sqlite_unit_of_work,
        output=RecordingSink(),
        github=StaticFetcher(stars=42),
    )

    assert report.summary.flag_counts["updated"] == 1
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.repos.get_by_full_name("vuejs/vue")
        assert stored is not None
        assert stored.stars == 42
        assert stored.updated_at is not None


def test_run_task_opens_a_github_client_when_needed(
    monkeypatch: pytest.MonkeyPatch, sqlite_unit_of_work: UnitOfWorkFactory
) -> None:
    _seed(sqlite_unit_of_work, "vuejs/vue")
    created: list[StaticFetcher] = []

    def fake_client(*, config: object) -> StaticFetcher:
        _ = config
        fetcher = StaticFetcher(stars=7)
        created.append(fetcher)
        return fetcher

    monkeypatch.setattr(app_module, "get_github_config", lambda: object())
    monkeypatch.setattr(app_module, "GitHubClient", fake_client)

    report = app_module.run_task(
        "update-github-data",
        unit_of_work_factory=sqlite_unit_of_work,
        output=RecordingSink(),
    )

    assert report.summary.success_count == 1
    assert len(created) == 1
    assert not created[0].entered


def test_unknown_task_is_rejected_before_touching_storage() -> None:
    def factory() -> SqlAlchemyRepoUnitOfWork:
        raise AssertionError("storage should not be opened")

    with pytest.raises(UnknownTaskError):
        app_module.run_task("nope", unit_of_work_factory=factory)


def test_list_tasks_returns_registered_tasks() -> None:
    assert [task.name for task in app_module.list_tasks()] == [
        "build-static-api",
        "update-github-data",
    ]


def test_tasks_without_output_leave_the_data_dir_alone(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    monkeypatch.setenv("REPOBATCH_DATA_DIR", str(tmp_path))
    _seed(sqlite_unit_of_work, "vuejs/vue")

    app_module.run_task(
        "update-github-data",
        unit_of_work_factory=sqlite_unit_of_work,
        github=StaticFetcher(stars=1),
    )

    assert not (tmp_path / "static-api").exists()


def test_static_api_is_written_to_the_data_dir_by_default(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    monkeypatch.setenv("REPOBATCH_DATA_DIR", str(tmp_path))
    _seed(sqlite_unit_of_work, "vuejs/vue")

    app_module.run_task("build-static-api", unit_of_work_factory=sqlite_unit_of_work)

    assert (tmp_path / "static-api" / "projects.json").is_file()
    assert (tmp_path / "static-api" / "projects-full.json").is_file()
