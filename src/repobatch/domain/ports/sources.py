"""Ports for selecting and loading the entities a batch walks over."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repobatch.domain.batch.options import Selection


@runtime_checkable
class IdentifierSource(Protocol):
    """Ordered identifiers matching a selection window (newest first)."""

    async def list_ids(self, selection: Selection) -> Sequence[str]: ...


@runtime_checkable
class EntitySource[E](Protocol):
    """Loads one fully-populated entity, or ``None`` when it does not exist."""

    async def get(self, identifier: str) -> E | None: ...


@runtime_checkable
class BatchSource[E](IdentifierSource, EntitySource[E], Protocol):
    """A store that can both select identifiers and resolve them."""
