"""SQLAlchemy adapter package for repobatch."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyRepoRepository
from .unit_of_work import SqlAlchemyRepoUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyRepoRepository",
    "SqlAlchemyRepoUnitOfWork",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
