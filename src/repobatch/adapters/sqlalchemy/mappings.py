"""SQLAlchemy mapping metadata for the repobatch domain model."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from repobatch.domain.model import Project, ProjectStatus, Repo

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class StringListType(TypeDecorator[list[str]]):
    """Ordered list of strings stored as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if value is None:
            return []
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        items = cast(list[Any], loaded)
        return [item for item in items if isinstance(item, str)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

repo_table = Table(
    "repo",
    mapper_registry.metadata,
    Column("id", String(32), primary_key=True),
    Column("full_name", String(255), nullable=False, unique=True),
    Column("owner_id", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("homepage", String(512), nullable=True),
    Column("stars", Integer, nullable=False, default=0),
    Column("contributor_count", Integer, nullable=True),
    Column("archived", Boolean, nullable=False, default=False),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("pushed_at", UTCDateTime(), nullable=True),
    Column("added_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_repo_added_at", "added_at"),
)

project_table = Table(
    "project",
    mapper_registry.metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column(
        "status",
        Enum(ProjectStatus, native_enum=False, length=32),
        nullable=False,
        default=ProjectStatus.ACTIVE,
    ),
    Column("logo", String(512), nullable=True),
    Column("url", String(512), nullable=True),
    Column("tags", StringListType(), nullable=False),
    Column("npm_package", String(255), nullable=True),
    Column("downloads", Integer, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("repo_id", String(32), ForeignKey("repo.id", ondelete="CASCADE"), nullable=True),
)

_MAPPERS_STARTED = False


def start_mappers() -> None:
    """Map the domain classes onto their tables; safe to call more than once."""

    global _MAPPERS_STARTED  # noqa: PLW0603
    if _MAPPERS_STARTED:
        return

    mapper_registry.map_imperatively(
        Repo,
        repo_table,
        properties={
            "projects": relationship(
                Project,
                back_populates="repo",
                order_by=project_table.c.created_at,
                cascade="all, delete-orphan",
            ),
        },
    )
    mapper_registry.map_imperatively(
        Project,
        project_table,
        properties={
            "repo": relationship(Repo, back_populates="projects"),
        },
    )
    configure_mappers()
    _MAPPERS_STARTED = True
    log.debug("SQLAlchemy mappers configured")


def create_all_tables(engine: Engine) -> None:
    mapper_registry.metadata.create_all(engine)
