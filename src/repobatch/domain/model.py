"""Domain entities for stored repositories and the projects that point at them.

Entities are plain classes; the SQLAlchemy adapter maps them imperatively so the
domain layer stays free of persistence imports.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProjectStatus(StrEnum):
    ACTIVE = "active"
    PROMOTED = "promoted"
    FEATURED = "featured"
    DEPRECATED = "deprecated"


class Repo:
    """A GitHub repository tracked by the application."""

    id: str
    full_name: str
    owner_id: str
    description: str | None
    homepage: str | None
    stars: int
    contributor_count: int | None
    archived: bool
    created_at: datetime | None
    pushed_at: datetime | None
    added_at: datetime
    updated_at: datetime | None
    projects: list[Project]

    def __init__(
        self,
        *,
        full_name: str,
        owner_id: str | None = None,
        description: str | None = None,
        homepage: str | None = None,
        stars: int = 0,
        contributor_count: int | None = None,
        archived: bool = False,
        created_at: datetime | None = None,
        pushed_at: datetime | None = None,
        added_at: datetime | None = None,
        updated_at: datetime | None = None,
        id: str | None = None,  # noqa: A002
    ) -> None:
        self.id = id or _new_id()
        self.full_name = full_name
        self.owner_id = owner_id or full_name.split("/", 1)[0]
        self.description = description
        self.homepage = homepage
        self.stars = stars
        self.contributor_count = contributor_count
        self.archived = archived
        self.created_at = created_at
        self.pushed_at = pushed_at
        self.added_at = added_at or _utcnow()
        self.updated_at = updated_at
        self.projects = []

    def __repr__(self) -> str:
        return f"Repo(id={self.id!r}, full_name={self.full_name!r})"

    @property
    def github_url(self) -> str:
        return f"https://github.com/{self.full_name}"

    def add_project(
        self,
        name: str,
        *,
        slug: str | None = None,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
        tags: list[str] | None = None,
        **kwargs: object,
    ) -> Project:
        project = Project(
            name=name,
            slug=slug,
            description=description,
            status=status,
            tags=tags,
            **kwargs,  # pyright: ignore[reportArgumentType]
        )
        project.repo = self
        if project not in self.projects:
            self.projects.append(project)
        return project


class Project:
    """A curated project entry, backed by one repository."""

    id: str
    name: str
    slug: str
    description: str | None
    status: ProjectStatus
    logo: str | None
    url: str | None
    tags: list[str]
    npm_package: str | None
    downloads: int | None
    created_at: datetime
    repo: Repo | None

    def __init__(
        self,
        *,
        name: str,
        slug: str | None = None,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
        logo: str | None = None,
        url: str | None = None,
        tags: list[str] | None = None,
        npm_package: str | None = None,
        downloads: int | None = None,
        created_at: datetime | None = None,
        id: str | None = None,  # noqa: A002
    ) -> None:
        self.id = id or _new_id()
        self.name = name
        self.slug = slug or _slugify(name)
        self.description = description
        self.status = status
        self.logo = logo
        self.url = url
        self.tags = list(tags or [])
        self.npm_package = npm_package
        self.downloads = downloads
        self.created_at = created_at or _utcnow()
        self.repo = None

    def __repr__(self) -> str:
        return f"Project(slug={self.slug!r})"

    @property
    def is_promoted(self) -> bool:
        return self.status is ProjectStatus.PROMOTED

    def display_description(self) -> str:
        """Project description, falling back to the repository one."""

        if self.description:
            return self.description
        if self.repo is not None and self.repo.description:
            return self.repo.description
        return ""

    def public_url(self) -> str | None:
        if self.url:
            return self.url
        if self.repo is None:
            return None
        return self.repo.homepage or self.repo.github_url


def _slugify(value: str) -> str:
    cleaned = "".join(char if char.isalnum() else "-" for char in value.strip().lower())
    return "-".join(part for part in cleaned.split("-") if part)
