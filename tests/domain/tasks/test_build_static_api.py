from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from repobatch.adapters.sqlalchemy.repositories import SqlAlchemyRepoRepository
from repobatch.domain.batch import ExecutionOptions
from repobatch.domain.model import ProjectStatus
from repobatch.domain.tasks import TaskContext
from repobatch.domain.tasks.build_static_api import (
    FULL_LIST_FILENAME,
    MAIN_LIST_FILENAME,
    build_project_item,
    project_repo,
    run,
    select_main_list,
    tags_in_use,
)
from tests.helpers.repos import BASE_TIME, make_repo

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session

    from repobatch.domain.tasks.build_static_api import ProjectItem


class RecordingSink:
    def __init__(self) -> None:
        self.saved: dict[str, dict[str, Any]] = {}

    def save(self, payload: Mapping[str, object], filename: str) -> Path:
        self.saved[filename] = dict(payload)
        return Path(filename)


def _item(**overrides: object) -> ProjectItem:
    item: ProjectItem = {
        "name": "Project",
        "status": "active",
        "tags": [],
        "pushed_at": BASE_TIME.date().isoformat(),
    }
    item.update(overrides)
    return item


def test_build_project_item_projects_repo_data() -> None:
    repo = make_repo(
        "vuejs/vue",
        stars=207412,
        homepage="https://vuejs.org",
        contributor_count=300,
        pushed_at=datetime(2024, 4, 12, 10, 0, tzinfo=UTC),
        created_at=datetime(2013, 7, 29, tzinfo=UTC),
    )
    project = repo.add_project(
        "Vue.js",
        tags=["vue", "framework"],
        logo="vue.svg",
        npm_package="vue",
        downloads=5_000_000,
        created_at=datetime(2016, 5, 1, tzinfo=UTC),
    )

    item = build_project_item(project, repo)

    assert item == {
        "name": "Vue.js",
        "slug": "vue-js",
        "added_at": "2016-05-01",
        "description": "",
        "stars": 207412,
        "full_name": "vuejs/vue",
        "owner_id": "vuejs",
        "status": "active",
        "tags": ["vue", "framework"],
        "contributor_count": 300,
        "pushed_at": "2024-04-12",
        "created_at": "2013-07-29",
        "url": "https://vuejs.org",
        "icon": "vue.svg",
        "npm": "vue",
        "downloads": 5_000_000,
    }


def test_archived_repos_are_flagged() -> None:
    repo = make_repo("bower/bower", archived=True)
    project = repo.add_project("Bower")

    item = build_project_item(project, repo)

    assert item["archived"] is True
    assert "npm" not in item


def test_repo_without_projects_is_a_flagged_success() -> None:
    outcome = asyncio.run(project_repo(make_repo("lonely/repo"), 0))

    assert outcome.payload == []  # pyright: ignore[reportAttributeAccessIssue]
    assert outcome.meta["no projects"] is True


def test_select_main_list_filters_stale_projects() -> None:
    now = BASE_TIME
    stale = (now - timedelta(days=400)).date().isoformat()
    items = [
        _item(name="fresh"),
        _item(name="deprecated", status=ProjectStatus.DEPRECATED.value),
        _item(name="archived", archived=True),
        _item(name="stale", pushed_at=stale),
        _item(name="promoted-stale", pushed_at=stale, status=ProjectStatus.PROMOTED.value),
        _item(name="promoted-deprecated", status=ProjectStatus.DEPRECATED.value),
        _item(name="never-pushed", pushed_at=""),
    ]

    selected = select_main_list(items, now=now)

    assert [item["name"] for item in selected] == ["fresh", "promoted-stale", "never-pushed"]


def test_tags_in_use_are_sorted_and_unique() -> None:
    items = [_item(tags=["vue", "ui"]), _item(tags=["ui", "animation"])]

    assert tags_in_use(items) == ["animation", "ui", "vue"]


def test_run_writes_full_and_main_lists(sqlite_session: Session) -> None:
    recent = datetime.now(UTC) - timedelta(days=10)
    vue = make_repo("vuejs/vue", age_days=0, stars=100, pushed_at=recent)
    vue.add_project("Vue.js", tags=["vue"])
    bower = make_repo("bower/bower", age_days=1, archived=True, pushed_at=recent)
    bower.add_project("Bower", tags=["package-manager"])
    empty = make_repo("lonely/repo", age_days=2)
    sqlite_session.add_all([vue, bower, empty])
    sqlite_session.commit()

    sink = RecordingSink()
    context = TaskContext(
        repos=SqlAlchemyRepoRepository(sqlite_session),
        options=ExecutionOptions(concurrency=2),
        output=sink,
    )

    report = asyncio.run(run(context))

    assert report.summary.total == 3
    assert report.summary.flag_counts == {"processed": 2, "no projects": 1}
    assert report.summary.numeric_totals["projects"] == 2

    full = sink.saved[FULL_LIST_FILENAME]
    assert full["count"] == 2
    assert [item["slug"] for item in full["projects"]] == ["vue-js", "bower"]

    main = sink.saved[MAIN_LIST_FILENAME]
    assert [item["slug"] for item in main["projects"]] == ["vue-js"]
    assert main["tags"] == ["vue"]
