"""Translate GitHub payloads into domain updates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repobatch.domain.ports.fetching import RepoDataUpdate

if TYPE_CHECKING:
    from .schema import GitHubRepository


def translate_repository(payload: GitHubRepository) -> RepoDataUpdate:
    return RepoDataUpdate(
        full_name=payload.full_name,
        stars=payload.stars,
        description=payload.description,
        homepage=payload.homepage,
        archived=payload.archived,
        created_at=payload.created_at,
        pushed_at=payload.pushed_at,
    )
