"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from repobatch.adapters.sqlalchemy.mappings import repo_table
from repobatch.domain.model import Repo

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from repobatch.domain.batch.options import Selection


class SqlAlchemyRepoRepository:
    """Stored repositories, newest first.

    Queries run on the unit of work's session; the async methods let the store
    stand in for the batch engine's identifier and entity sources. They call the
    session directly on the event loop thread, so one store must never be shared
    between threads or served by concurrent sessions.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Repo) -> None:
        self.session.add(entity)

    def get_by_full_name(self, full_name: str) -> Repo | None:
        stmt = select(Repo).where(repo_table.c.full_name == full_name).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def select_ids(self, selection: Selection) -> list[str]:
        stmt = select(repo_table.c.id).order_by(repo_table.c.added_at.desc(), repo_table.c.id)
        if selection.name_filter:
            stmt = stmt.where(repo_table.c.full_name == selection.name_filter)
        if selection.limit:
            stmt = stmt.limit(selection.limit)
        if selection.skip:
            stmt = stmt.offset(selection.skip)
        return list(self.session.execute(stmt).scalars())

    def load(self, identifier: str) -> Repo | None:
        return self.session.get(Repo, identifier, options=[selectinload(Repo.projects)])  # pyright: ignore[reportArgumentType]

    async def list_ids(self, selection: Selection) -> list[str]:
        return self.select_ids(selection)

    async def get(self, identifier: str) -> Repo | None:
        return self.load(identifier)
