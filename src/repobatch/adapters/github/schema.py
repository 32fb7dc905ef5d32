"""Pydantic models describing the GitHub REST API repository payload."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GitHubOwner(GitHubBaseModel):
    login: str
    id: int | None = None


class GitHubRepository(GitHubBaseModel):
    id: int
    full_name: str
    owner: GitHubOwner
    description: str | None = None
    homepage: str | None = None
    stars: int = Field(alias="stargazers_count", default=0)
    archived: bool = False
    created_at: datetime | None = None
    pushed_at: datetime | None = None
    default_branch: str | None = None

    _normalize_description = field_validator("description", mode="before")(_blank_to_none)
    _normalize_homepage = field_validator("homepage", mode="before")(_blank_to_none)
