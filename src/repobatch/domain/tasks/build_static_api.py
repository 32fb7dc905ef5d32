"""Build the static JSON API consumed by the frontend."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING, Any

from repobatch.domain.batch import Success
from repobatch.domain.model import ProjectStatus

from .registry import Task

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from repobatch.domain.batch import AggregatedReport, Outcome
    from repobatch.domain.model import Project, Repo

    from .registry import TaskContext

log = getLogger(__name__)

type ProjectItem = dict[str, Any]

MAIN_LIST_FILENAME = "projects.json"
FULL_LIST_FILENAME = "projects-full.json"
INACTIVITY_THRESHOLD = timedelta(days=365)


def format_date(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


def build_project_item(project: Project, repo: Repo) -> ProjectItem:
    """JSON projection of one project and the repository backing it."""

    item: ProjectItem = {
        "name": project.name,
        "slug": project.slug,
        "added_at": format_date(project.created_at),
        "description": project.display_description(),
        "stars": repo.stars or 0,
        "full_name": repo.full_name,
        "owner_id": repo.owner_id,
        "status": str(project.status or ProjectStatus.ACTIVE),
        "tags": list(project.tags),
        "contributor_count": repo.contributor_count,
        "pushed_at": format_date(repo.pushed_at),
        "created_at": format_date(repo.created_at),
    }
    url = project.public_url()
    if url:
        item["url"] = url
    if project.logo:
        item["icon"] = project.logo
    if project.npm_package:
        item["npm"] = project.npm_package
        if project.downloads is not None:
            item["downloads"] = project.downloads
    if repo.archived:
        item["archived"] = True
    return item


async def project_repo(repo: Repo, index: int) -> Outcome[list[ProjectItem]]:
    _ = index
    if not repo.projects:
        return Success(payload=[], meta={"no projects": True, "projects": 0})
    items = [build_project_item(project, repo) for project in repo.projects]
    return Success(payload=items, meta={"processed": True, "projects": len(items)})


def is_inactive(item: ProjectItem, *, now: datetime) -> bool:
    pushed_at = item.get("pushed_at")
    if not pushed_at:
        return False
    last_push = datetime.fromisoformat(pushed_at).replace(tzinfo=UTC)
    return now - last_push > INACTIVITY_THRESHOLD


def is_promoted(item: ProjectItem) -> bool:
    return item.get("status") == ProjectStatus.PROMOTED


def select_main_list(items: Iterable[ProjectItem], *, now: datetime) -> list[ProjectItem]:
    """Projects worth listing on the front page.

    Deprecated projects are always dropped; archived and inactive ones only when
    they are not promoted.
    """

    selected: list[ProjectItem] = []
    for item in items:
        if item.get("status") == ProjectStatus.DEPRECATED:
            continue
        if not is_promoted(item) and (item.get("archived") or is_inactive(item, now=now)):
            continue
        selected.append(item)
    return selected


def tags_in_use(items: Iterable[ProjectItem]) -> list[str]:
    return sorted({tag for item in items for tag in item.get("tags", [])})


def flatten(payloads: Sequence[list[ProjectItem]]) -> list[ProjectItem]:
    return [item for items in payloads for item in items]


async def run(context: TaskContext) -> AggregatedReport[list[ProjectItem]]:
    output = context.require_output()
    report = await context.process_repos(project_repo)

    now = datetime.now(UTC)
    projects = flatten(report.payloads)
    log.info("%d projects to include in the full list", len(projects))
    output.save({"date": now, "count": len(projects), "projects": projects}, FULL_LIST_FILENAME)

    main_list = select_main_list(projects, now=now)
    log.info("%d projects to include in the main JSON file", len(main_list))
    output.save(
        {"date": now, "tags": tags_in_use(main_list), "projects": main_list},
        MAIN_LIST_FILENAME,
    )
    return report


build_static_api_task = Task(
    name="build-static-api",
    description="Build a static API from the database, to be used by the frontend app.",
    run=run,
    needs_output=True,
)
