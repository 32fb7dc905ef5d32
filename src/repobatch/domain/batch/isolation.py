"""Per-item failure isolation around the caller's unit of work."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import EntityNotFoundError, UnitOfWorkFailure
from .outcome import Failure

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from repobatch.domain.ports.sources import EntitySource

    from .context import ExecutionContext
    from .outcome import Outcome


class FailureIsolator[E, T]:
    """Resolve an identifier, then run the unit of work inside a guarded boundary.

    Resolution is never isolated: a missing entity raises
    :class:`EntityNotFoundError` whatever ``fail_fast`` says. Exceptions from the
    unit of work are logged and either turned into a :class:`Failure` outcome or,
    in fail-fast mode, re-raised as :class:`UnitOfWorkFailure`.

    Labels and log records are diagnostics only: when ``describe`` fails the
    identifier is used as label, and logging errors are dropped.
    """

    def __init__(
        self,
        source: EntitySource[E],
        unit_of_work: Callable[[E, int], Awaitable[Outcome[T]]],
        *,
        context: ExecutionContext,
        fail_fast: bool = False,
        describe: Callable[[E], str] = str,
    ) -> None:
        self._source = source
        self._unit_of_work = unit_of_work
        self._context = context
        self._fail_fast = fail_fast
        self._describe = describe

    async def resolve(self, identifier: str) -> E:
        entity = await self._source.get(identifier)
        if entity is None:
            raise EntityNotFoundError(identifier)
        return entity

    def label(self, identifier: str, entity: E) -> str:
        try:
            return str(self._describe(entity))
        except Exception as exc:  # noqa: BLE001
            self._context.emit(logging.DEBUG, "Cannot describe %s: %s", identifier, exc)
            return identifier

    async def __call__(self, identifier: str, index: int) -> Outcome[T]:
        entity = await self.resolve(identifier)
        label = self.label(identifier, entity)
        self._context.emit(logging.DEBUG, "Processing #%d %s", index + 1, label)
        try:
            outcome = await self._unit_of_work(entity, index)
        except Exception as exc:
            self._context.emit(
                logging.ERROR, "Error processing %s: %s", label, exc, exc_info=exc
            )
            if self._fail_fast:
                raise UnitOfWorkFailure(identifier, label=label, index=index) from exc
            return Failure(meta={"error": True})
        self._context.emit(
            logging.DEBUG, "Processed #%d %s %s", index + 1, label, dict(outcome.meta)
        )
        return outcome
